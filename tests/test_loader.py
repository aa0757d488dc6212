from pathlib import Path

import pytest

from nombus.configurator import InvalidColumn, InvalidSeparator
from nombus.loader import (
    ConfigSourceError,
    configure_from_bytes,
    decode_config_bytes,
    load_config_bytes,
    load_config_file,
    parse_config_text,
)

CONFIG_PATH = Path(__file__).parent / "config.yml"


def test_load_config_file():
    config = load_config_file(CONFIG_PATH)
    assert config.column == 2
    assert config.column_index == 1
    assert config.separator == ","


def test_single_quoted_tab_escape_is_translated():
    config = load_config_bytes(b"column: '3'\nseparator: '\\t'\n")
    assert config.column == "3"
    assert config.column_index == 2
    assert config.separator == "\t"


def test_double_quoted_tab_is_accepted():
    config = load_config_bytes(b'column: 1\nseparator: "\\t"\n')
    assert config.separator == "\t"


def test_utf8_bom_is_stripped():
    text, report = decode_config_bytes(b"\xef\xbb\xbfcolumn: 1\nseparator: '|'\n")
    assert not text.startswith("\ufeff")
    assert parse_config_text(text) == {"column": 1, "separator": "|"}


def test_invalid_yaml_raises_source_error():
    with pytest.raises(ConfigSourceError):
        parse_config_text("column: [1\n")


@pytest.mark.parametrize("text", ["", "- 1\n- 2\n", "just a string\n"])
def test_non_mapping_root_raises_source_error(text):
    with pytest.raises(ConfigSourceError):
        parse_config_text(text)


def test_invalid_values_propagate():
    with pytest.raises(InvalidColumn):
        load_config_bytes(b"column: abc\nseparator: ','\n")
    with pytest.raises(InvalidSeparator):
        load_config_bytes(b"column: 1\nseparator: ' '\n")


def test_configure_from_bytes_envelope():
    data = configure_from_bytes(b"column: 4\nseparator: ';'\n")
    assert data["settings"] == {"column": 4, "column_index": 3, "separator": ";"}
    assert data["report"]["encoding"]["decode_fallback"] is False
    assert data["report"]["encoding"]["decode_used"]


class _Guess:
    def __init__(self, encoding):
        self.encoding = encoding


class _Matches:
    def __init__(self, best):
        self._best = best

    def best(self):
        return self._best


def test_utf8_config_is_not_guessed(monkeypatch):
    def fail(raw):
        raise AssertionError("charset detection should not run for UTF-8 input")

    monkeypatch.setattr("nombus.loader.from_bytes", fail)
    data = configure_from_bytes("column: 1\nseparator: '§'\n".encode("utf-8"))
    assert data["settings"]["separator"] == "§"
    assert data["report"]["encoding"] == {
        "detected": None,
        "decode_used": "utf-8",
        "decode_fallback": False,
    }


def test_latin1_config_is_flagged_as_fallback():
    raw = "column: 1\nseparator: '§'\n".encode("latin-1")
    text, report = decode_config_bytes(raw)
    assert report["decode_fallback"] is True
    assert report["decode_used"] != "utf-8-sig"


def test_latin1_config_uses_detected_encoding(monkeypatch):
    monkeypatch.setattr("nombus.loader.from_bytes", lambda raw: _Matches(_Guess("latin_1")))
    data = configure_from_bytes("column: 1\nseparator: '§'\n".encode("latin-1"))
    assert data["settings"]["separator"] == "§"
    assert data["report"]["encoding"] == {
        "detected": "latin_1",
        "decode_used": "latin_1",
        "decode_fallback": True,
    }


def test_undetectable_config_decodes_with_replacement(monkeypatch, caplog):
    monkeypatch.setattr("nombus.loader.from_bytes", lambda raw: _Matches(None))
    with caplog.at_level("WARNING", logger="nombus.loader"):
        text, report = decode_config_bytes(b"column: 1\nseparator: '\xa7'\n")

    assert "�" in text
    assert report == {"detected": None, "decode_used": "utf-8", "decode_fallback": True}
    assert "not UTF-8" in caplog.text
