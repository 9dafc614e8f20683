"""
apps.platform_interface.services.env_export
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Flatten service credentials into environment-variable style names.

Each credential becomes ``<PREFIX>__<SERVICE>__<KEY>`` (upper-cased), so a
``postgres`` service with a ``user`` key is exported as
``PM__POSTGRES__USER`` with the default prefix.  Settings modules can then
pick the values up with ``decouple.config("PM__POSTGRES__USER")``.

The function is pure: it returns a new mapping and never touches
``os.environ``.  Applying the result is left to the hosting application.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

DEFAULT_PREFIX = "PM"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")


def _env_segment(value: str) -> str:
    return _UNSAFE_CHARS.sub("_", str(value)).upper()


def export_service_environment(
    services: Mapping[str, Mapping[str, Any]],
    prefix: str = DEFAULT_PREFIX,
) -> dict[str, str]:
    """
    Return ``{"<PREFIX>__<SERVICE>__<KEY>": str(value)}`` for every
    credential of every service.

    Args:
        services: Service name → credential mapping.
        prefix: Leading name segment, e.g. ``"PM"`` or ``"DJANGO__PM"``.

    Returns:
        A new dict; *services* is not modified.
    """
    exported: dict[str, str] = {}
    for service, credentials in services.items():
        for key, value in credentials.items():
            name = "__".join((prefix.upper(), _env_segment(service), _env_segment(key)))
            exported[name] = str(value)
    return exported
