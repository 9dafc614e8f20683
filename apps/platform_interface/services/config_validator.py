"""
apps.platform_interface.services.config_validator
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Normalize and validate a generic configuration tree into a typed,
immutable :class:`ResolvedConfig`.

This module is **pure Python** — it has zero Django imports.

The same routine handles both resolution sources:

1. **Normalize** – ``services``, ``workspace`` and ``node`` are inserted as
   empty mappings when absent.  For a local file only, a top-level ``port``
   replaces the default of 9001.  On the platform the port comes exclusively
   from ``PM_PORT``.
2. **Validate** – ``application`` must exist and must contain ``name``,
   ``version``, ``workspace`` and ``workspace_stub``.  Keys are checked in
   that fixed order and the first missing one is reported.

Unlike override validation elsewhere, errors are **not** accumulated: the
first problem found raises, because a half-valid configuration is never
usable at startup.

Public API
----------
DEFAULT_PORT
ApplicationInfo   – Typed ``application`` section
ResolvedConfig    – Typed, frozen result
build_resolved_config(source) -> ResolvedConfig
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from apps.platform_interface.exceptions import InvalidValue, MissingKey, MissingSection
from .sources import PlatformSource, ResolutionSource

# It's over 9000.
DEFAULT_PORT = 9001

#: Required ``application`` keys, in the order they are checked.
REQUIRED_APPLICATION_KEYS: tuple[str, ...] = ("name", "version", "workspace", "workspace_stub")

#: Sections inserted as empty mappings when the source omits them.
OPTIONAL_SECTIONS: tuple[str, ...] = ("services", "workspace", "node")


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ApplicationInfo:
    """
    The validated ``application`` section.

    Attributes:
        name: Application name.
        version: Application version number.
        workspace_name: Human-readable workspace name (``workspace`` key).
        workspace_stub: URL-friendly workspace identifier
            (``workspace_stub`` key).
    """

    name: str
    version: int
    workspace_name: str
    workspace_stub: str


@dataclass(frozen=True)
class ResolvedConfig:
    """
    Fully-resolved configuration built once from a single source.

    Attributes:
        is_on_platform: ``True`` iff resolved from the platform environment.
        application: The validated application section.
        port: TCP port the application should listen on.
        node_tags: Tags of the node the application runs on.
        workspace_tags: Tags of the application's workspace.
        services: Service name → credential mapping.
    """

    # Holds dicts; equality is supported, hashing is not.
    __hash__ = None

    is_on_platform: bool
    application: ApplicationInfo
    port: int = DEFAULT_PORT
    node_tags: dict[str, Any] = field(default_factory=dict)
    workspace_tags: dict[str, Any] = field(default_factory=dict)
    services: dict[str, dict[str, Any]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _coerce_int(value: object, key: str) -> int:
    """
    Return *value* as an :class:`int`.

    Accepts ints and integer strings.  ``bool`` is rejected even though it
    is a subclass of ``int``.
    """
    if isinstance(value, bool):
        raise InvalidValue(key, f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise InvalidValue(key, f"expected an integer, got {value!r}")


def _normalize(tree: dict) -> dict:
    """Return a copy of *tree* with every optional section present."""
    normalized = dict(tree)
    for section in OPTIONAL_SECTIONS:
        value = normalized.get(section)
        if value is None:
            normalized[section] = {}
        elif not isinstance(value, dict):
            raise InvalidValue(section, f"expected a mapping, got {type(value).__name__}")

    for name, credentials in normalized["services"].items():
        if not isinstance(credentials, dict):
            raise InvalidValue(
                f"services.{name}",
                f"expected a mapping, got {type(credentials).__name__}",
            )
    return normalized


def _validate_application(tree: dict) -> ApplicationInfo:
    if "application" not in tree:
        raise MissingSection("application")

    application = tree["application"]
    if not isinstance(application, dict):
        raise InvalidValue(
            "application", f"expected a mapping, got {type(application).__name__}"
        )

    for key in REQUIRED_APPLICATION_KEYS:
        if key not in application:
            raise MissingKey(key)

    return ApplicationInfo(
        name=application["name"],
        version=_coerce_int(application["version"], "application.version"),
        workspace_name=application["workspace"],
        workspace_stub=application["workspace_stub"],
    )


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def build_resolved_config(source: ResolutionSource) -> ResolvedConfig:
    """
    Convert *source* into a :class:`ResolvedConfig`.

    Args:
        source: A :class:`PlatformSource` or :class:`LocalFileSource`.

    Returns:
        A new ``ResolvedConfig`` whose mappings are deep copies, independent
        of the source's parsed tree.

    Raises:
        InvalidValue: If a section or the port has the wrong shape.
        MissingSection: If ``application`` is absent.
        MissingKey: If a required ``application`` key is absent.
    """
    if isinstance(source, PlatformSource):
        tree = dict(source.metadata)
        tree["services"] = source.services
        on_platform = True
    else:
        tree = source.tree
        on_platform = False

    tree = _normalize(tree)

    port = DEFAULT_PORT
    if on_platform:
        if source.port is not None:
            port = source.port
    elif "port" in tree:
        port = _coerce_int(tree["port"], "port")

    application = _validate_application(tree)

    return ResolvedConfig(
        is_on_platform=on_platform,
        application=application,
        port=port,
        node_tags=copy.deepcopy(tree["node"]),
        workspace_tags=copy.deepcopy(tree["workspace"]),
        services=copy.deepcopy(tree["services"]),
    )
