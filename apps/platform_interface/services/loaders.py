"""
apps.platform_interface.services.loaders
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Parse override file text into a generic key-value tree.

JSON is always available; YAML (via PyYAML's ``safe_load``) only when the
caller enables it.  The format is chosen purely from the file extension.

Public API
----------
FORMAT_JSON, FORMAT_YAML   – format identifiers
detect_format(path, yaml_support) -> str
parse_document(path, contents, fmt) -> dict
"""
from __future__ import annotations

import json
from pathlib import Path

import yaml

from apps.platform_interface.exceptions import ParseFailure, UnsupportedFormat

FORMAT_JSON = "json"
FORMAT_YAML = "yaml"

_JSON_SUFFIXES: frozenset[str] = frozenset({".json"})
_YAML_SUFFIXES: frozenset[str] = frozenset({".yml", ".yaml"})


def detect_format(path: str | Path, yaml_support: bool) -> str:
    """
    Return the format identifier for *path*.

    Raises:
        UnsupportedFormat: If the extension is unknown, or is a YAML extension
            while *yaml_support* is disabled.
    """
    suffix = Path(path).suffix.lower()
    if suffix in _JSON_SUFFIXES:
        return FORMAT_JSON
    if yaml_support and suffix in _YAML_SUFFIXES:
        return FORMAT_YAML
    raise UnsupportedFormat(str(path))


def parse_document(path: str | Path, contents: str, fmt: str) -> dict:
    """
    Parse *contents* (read from *path*) according to *fmt*.

    The top level of the document must be a mapping.

    Raises:
        ParseFailure: On a syntax error or when the document is not a mapping.
    """
    if fmt == FORMAT_JSON:
        try:
            parsed = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise ParseFailure(str(path), f"invalid JSON ({exc})") from exc
    elif fmt == FORMAT_YAML:
        try:
            parsed = yaml.safe_load(contents)
        except yaml.YAMLError as exc:
            raise ParseFailure(str(path), f"invalid YAML ({exc})") from exc
    else:
        raise UnsupportedFormat(str(path))

    if not isinstance(parsed, dict):
        raise ParseFailure(
            str(path),
            f"top level must be a mapping, got {type(parsed).__name__}",
        )
    return parsed
