"""
Settings rules shared by the configurator and the loader.

Only the escape literals listed here are interpreted.
"""

ESCAPE_LITERALS = {
    "\\t": "\t",
}

ALLOWED_WHITESPACE_SEPARATORS = frozenset({"\t"})

CONFIG_EXTENSIONS = (".yml", ".yaml")
FALLBACK_ENCODING = "utf-8"
