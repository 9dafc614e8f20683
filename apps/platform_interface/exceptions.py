"""
apps.platform_interface.exceptions
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Error taxonomy for platform configuration resolution.

No Django imports are allowed here so that the resolver and its errors can be
used and tested without Django setup.

Every error carries a human-readable ``detail`` and a machine-readable
``code``.  Construction errors abort resolution entirely; ``ServiceNotFound``
is the only error raised by an accessor.
"""
from __future__ import annotations

from collections.abc import Sequence


class ConfigError(Exception):
    """Base class for every platform configuration error."""

    code: str = "configuration_error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    def __str__(self) -> str:
        return self.detail


class NoConfigurationFound(ConfigError):
    """None of the supplied override paths exist."""

    code = "no_configuration_found"

    def __init__(self, paths: Sequence[str]) -> None:
        self.paths = list(paths)
        searched = ", ".join(self.paths) if self.paths else "(no paths supplied)"
        super().__init__(
            f"Unable to find an override configuration to load. Searched: {searched}."
        )


class UnsupportedFormat(ConfigError):
    """The override file exists but its extension cannot be read."""

    code = "unsupported_format"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Unknown configuration file format for {path}.")


class ParseFailure(ConfigError):
    """The override file is not a valid JSON/YAML mapping."""

    code = "parse_failure"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to parse configuration file {path}: {reason}")


class MalformedPlatformData(ConfigError):
    """A platform-supplied environment variable is not usable."""

    code = "malformed_platform_data"

    def __init__(self, variable: str, reason: str) -> None:
        self.variable = variable
        self.reason = reason
        super().__init__(f"Malformed platform data in {variable}: {reason}")


class MissingSection(ConfigError):
    """A required top-level section is absent."""

    code = "missing_section"

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(
            f"You must supply an {section} section in your configuration."
        )


class MissingKey(ConfigError):
    """A required key is absent from the ``application`` section."""

    code = "missing_key"

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing required key {key} in application configuration.")


class InvalidValue(ConfigError):
    """A present value has the wrong shape (e.g. a non-integer port)."""

    code = "invalid_value"

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid value for {key}: {reason}")


class ServiceNotFound(ConfigError):
    """An accessor asked for a service that was never declared."""

    code = "service_not_found"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No such service {name}")
