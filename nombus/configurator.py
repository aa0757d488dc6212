"""
Validated column/separator settings for the row processor.

`column` is authored 1-based and kept in the representation it was given;
`column_index` is the 0-based position derived from it on every read.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from .rules import ALLOWED_WHITESPACE_SEPARATORS, ESCAPE_LITERALS

_DIGITS = re.compile(r"[0-9]+")
_MISSING = object()


class ConfigurationError(ValueError):
    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = None if value is _MISSING else value
        self.reason = reason
        super().__init__(f"invalid {field}: {self.value!r} ({reason})")


class InvalidColumn(ConfigurationError):
    def __init__(self, value: Any, reason: str):
        super().__init__("column", value, reason)


class InvalidSeparator(ConfigurationError):
    def __init__(self, value: Any, reason: str):
        super().__init__("separator", value, reason)


def parse_column(value: Any) -> int:
    """
    Interpret a 1-based column designator as an int.

    Accepts ints and strings made only of decimal digits. bool is an int
    subclass and is rejected explicitly.
    """
    if value is _MISSING:
        raise InvalidColumn(value, "missing")

    if isinstance(value, bool):
        raise InvalidColumn(value, "not a number")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value):
        try:
            number = int(value)
        except ValueError as e:
            # int() caps digit strings at sys.get_int_max_str_digits()
            raise InvalidColumn(value, "too large") from e
    else:
        raise InvalidColumn(value, "not a number")

    if number < 1:
        raise InvalidColumn(value, "must be 1 or greater")
    return number


def normalize_separator(value: Any) -> str:
    if value is _MISSING:
        raise InvalidSeparator(value, "missing")
    if not isinstance(value, str):
        raise InvalidSeparator(value, "not a string")

    sep = ESCAPE_LITERALS.get(value, value)

    if len(sep) != 1:
        raise InvalidSeparator(value, "must be exactly one character")
    if sep.isspace() and sep not in ALLOWED_WHITESPACE_SEPARATORS:
        raise InvalidSeparator(value, "whitespace is not a usable separator")
    return sep


class Configurator:
    """
    Holder for the two settings the row processor needs.

    Every assignment re-validates; a rejected value leaves the previous one
    in place.
    """

    def __init__(self, config: Mapping[str, Any]):
        if not isinstance(config, Mapping):
            raise TypeError(f"config must be a mapping, got {type(config).__name__}")

        self.column = config.get("column", _MISSING)
        self.separator = config.get("separator", _MISSING)

    @property
    def column(self) -> Any:
        return self._column

    @column.setter
    def column(self, value: Any) -> None:
        parse_column(value)
        self._column = value

    @property
    def column_index(self) -> int:
        return parse_column(self._column) - 1

    @property
    def separator(self) -> str:
        return self._separator

    @separator.setter
    def separator(self, value: Any) -> None:
        self._separator = normalize_separator(value)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "column_index": self.column_index,
            "separator": self.separator,
        }

    def __repr__(self) -> str:
        return f"Configurator(column={self._column!r}, separator={self._separator!r})"
