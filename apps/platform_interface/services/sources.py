"""
apps.platform_interface.services.sources
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Select the single source a configuration is resolved from.

A resolution source is one of two variants:

    * :class:`PlatformSource` – the Paasmaker platform injected ``PM_METADATA``
      and ``PM_SERVICES`` (and optionally ``PM_PORT``) into the environment.
    * :class:`LocalFileSource` – the first existing override file from an
      ordered list of candidate paths.

The platform environment is authoritative: it is consulted first and, when
both variables are present (an empty string counts as present), files are
never looked at.  In local mode the first existing file is used and scanning
stops there, whether or not that file turns out to be readable.

Environment values are read through a :class:`decouple.Config` so callers can
choose whether a dotenv file participates.
"""
from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import structlog
from decouple import Config, RepositoryEmpty

from apps.platform_interface.exceptions import (
    MalformedPlatformData,
    NoConfigurationFound,
    ParseFailure,
)
from .loaders import detect_format, parse_document

logger = structlog.get_logger(__name__)

METADATA_VAR = "PM_METADATA"
SERVICES_VAR = "PM_SERVICES"
PORT_VAR = "PM_PORT"


@dataclass(frozen=True)
class PlatformSource:
    """Configuration injected by the platform through the environment."""

    metadata: dict
    services: dict
    port: int | None = None


@dataclass(frozen=True)
class LocalFileSource:
    """Configuration read from a developer-supplied override file."""

    path: str
    format: str
    tree: dict


ResolutionSource = Union[PlatformSource, LocalFileSource]


def process_environment() -> Config:
    """Return a decouple ``Config`` backed by ``os.environ`` only."""
    return Config(RepositoryEmpty())


def _parse_platform_object(variable: str, raw: str) -> dict:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPlatformData(variable, f"invalid JSON ({exc})") from exc
    if not isinstance(parsed, dict):
        raise MalformedPlatformData(
            variable, f"expected a JSON object, got {type(parsed).__name__}"
        )
    return parsed


def read_platform_source(env: Config) -> PlatformSource | None:
    """
    Build a :class:`PlatformSource` from *env*, or return ``None`` when the
    application is not running on the platform.

    Raises:
        MalformedPlatformData: If a payload is not a JSON object or
            ``PM_PORT`` is not an integer.
    """
    raw_metadata = env.get(METADATA_VAR, default=None)
    raw_services = env.get(SERVICES_VAR, default=None)
    if raw_metadata is None or raw_services is None:
        return None

    metadata = _parse_platform_object(METADATA_VAR, raw_metadata)
    services = _parse_platform_object(SERVICES_VAR, raw_services)

    port: int | None = None
    raw_port = env.get(PORT_VAR, default=None)
    if raw_port is not None:
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise MalformedPlatformData(
                PORT_VAR, f"expected an integer, got {raw_port!r}"
            ) from exc

    return PlatformSource(metadata=metadata, services=services, port=port)


def find_local_source(
    override_paths: Sequence[str | Path],
    yaml_support: bool,
) -> LocalFileSource:
    """
    Load the first existing file in *override_paths*.

    Raises:
        NoConfigurationFound: If none of the paths exist.
        UnsupportedFormat: If the first existing file has an unreadable
            extension.  Later paths are not tried.
        ParseFailure: If the first existing file cannot be parsed.
    """
    for candidate in override_paths:
        path = Path(candidate)
        if not path.is_file():
            logger.debug("override_path_missing", path=str(path))
            continue

        fmt = detect_format(path, yaml_support)
        try:
            contents = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ParseFailure(str(path), f"not UTF-8 text ({exc})") from exc
        except OSError as exc:
            raise ParseFailure(str(path), f"unreadable ({exc})") from exc
        tree = parse_document(path, contents, fmt)
        return LocalFileSource(path=str(path), format=fmt, tree=tree)

    raise NoConfigurationFound([str(p) for p in override_paths])


def select_source(
    override_paths: Sequence[str | Path],
    yaml_support: bool,
    env: Config | None = None,
) -> ResolutionSource:
    """Return the platform source if present, otherwise the first local file."""
    platform = read_platform_source(env if env is not None else process_environment())
    if platform is not None:
        return platform
    return find_local_source(override_paths, yaml_support)
