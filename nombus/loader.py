"""
Loads column/separator settings from a YAML configuration source.

Responsibilities:
- encoding detection + decoding of the raw config bytes
- YAML parsing into a mapping
- building a validated Configurator
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from charset_normalizer import from_bytes

from .configurator import Configurator
from .rules import FALLBACK_ENCODING

logger = logging.getLogger(__name__)


class ConfigSourceError(ValueError):
    """The configuration source could not be read as a YAML mapping."""


def decode_config_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode config bytes to text.

    Rules:
    - Strict UTF-8 first (YAML's default); a UTF-8 BOM is stripped.
    - Otherwise use charset-normalizer's best guess and flag the fallback.
      Guesses on a few dozen bytes are unreliable, so callers should
      surface `decode_fallback`.
    - Last resort: UTF-8 with replacement characters.
    """
    detected = None
    decode_used = "utf-8-sig" if raw.startswith(b"\xef\xbb\xbf") else FALLBACK_ENCODING

    try:
        text = raw.decode(decode_used)
    except UnicodeDecodeError:
        text = None

    decode_fallback = text is None
    if decode_fallback:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
            try:
                text = raw.decode(detected)
                decode_used = detected
            except (UnicodeDecodeError, LookupError):
                text = None
        if text is None:
            text = raw.decode(FALLBACK_ENCODING, errors="replace")
            decode_used = FALLBACK_ENCODING
        logger.warning("Config is not UTF-8, decoded as %s (detected: %s)", decode_used, detected)

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report


def parse_config_text(text: str) -> Dict[str, Any]:
    try:
        config = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigSourceError(f"Invalid YAML in configuration: {e}") from e

    if not isinstance(config, dict):
        raise ConfigSourceError("Configuration root must be a mapping")
    return config


def load_config_bytes(raw: bytes) -> Configurator:
    text, _ = decode_config_bytes(raw)
    return Configurator(parse_config_text(text))


def load_config_file(path: Union[str, Path]) -> Configurator:
    path = Path(path)
    logger.info("Loading configuration from: %s", path)
    return load_config_bytes(path.read_bytes())


def configure_from_bytes(raw: bytes) -> Dict[str, Any]:
    """
    Returns a dict matching the API's response envelope.

    Validation errors from the Configurator propagate to the caller.
    """
    text, enc_report = decode_config_bytes(raw)
    config = Configurator(parse_config_text(text))

    logger.info("Configured column %r with separator %r", config.column, config.separator)
    return {
        "settings": config.as_dict(),
        "report": {
            "encoding": enc_report,
        },
    }
