"""
apps.platform_interface.services.config_resolver
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Resolve-once, read-many view of the application's platform configuration.

Resolution order:
    1. **Platform environment** - if ``PM_METADATA`` and ``PM_SERVICES`` are
       both present the application is running on Paasmaker and the injected
       JSON payloads are authoritative.  ``PM_PORT`` optionally overrides the
       listening port.
    2. **Override file** - otherwise the first existing path from the
       caller's ordered list is loaded (``.json`` always, ``.yml``/``.yaml``
       when YAML support is enabled).

Exactly one source is used and nothing is merged across sources.  All
validation happens during construction; once an instance exists every
accessor is a plain read.  Accessors returning mappings, and the
``resolved`` property, hand out deep copies so the resolved state cannot be
mutated through them.

This module is **pure Python** — it has zero Django imports.

Public API
----------
ConfigResolver(override_paths, yaml_support=False, env=None, environment_tag="APP_ENV")
"""
from __future__ import annotations

import copy
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog
from decouple import Config

from apps.platform_interface.exceptions import ServiceNotFound
from .config_validator import ResolvedConfig, build_resolved_config
from .env_export import DEFAULT_PREFIX, export_service_environment
from .sources import LocalFileSource, ResolutionSource, select_source

logger = structlog.get_logger(__name__)

DEFAULT_ENVIRONMENT_TAG = "APP_ENV"


class ConfigResolver:
    """
    Determines whether the application runs on the platform or locally and
    exposes application metadata, tags and service credentials.

    Example::

        resolver = ConfigResolver(
            ["../project-name.json", "/etc/project-name/config.yml"],
            yaml_support=True,
        )
        resolver.get_application_name()      # → "project-name"
        resolver.get_service("postgres")     # → {"host": ..., "user": ...}

    Args:
        override_paths: Ordered candidate configuration files, consulted
            only when the platform environment is absent.
        yaml_support: Also accept ``.yml``/``.yaml`` override files.
        env: The :class:`decouple.Config` used to read ``PM_*`` values.
            Defaults to the process environment only.
        environment_tag: Workspace tag holding the deployment environment
            name, see :meth:`get_environment_name`.

    Raises:
        ConfigError: Any subclass, when no usable configuration can be
            resolved.  No partially-constructed instance is ever returned.
    """

    def __init__(
        self,
        override_paths: Sequence[str | Path],
        yaml_support: bool = False,
        env: Config | None = None,
        environment_tag: str = DEFAULT_ENVIRONMENT_TAG,
    ) -> None:
        self._override_paths = list(override_paths)
        self._yaml_support = yaml_support
        self._environment_tag = environment_tag

        self._source: ResolutionSource = select_source(
            self._override_paths, yaml_support, env
        )
        self._resolved: ResolvedConfig = build_resolved_config(self._source)

        logger.info(
            "platform_config_resolved",
            mode="platform" if self._resolved.is_on_platform else "local",
            source=self._source.path if isinstance(self._source, LocalFileSource) else "environment",
            application=self._resolved.application.name,
            version=self._resolved.application.version,
            port=self._resolved.port,
        )

    # ------------------------------------------------------------------
    # Resolution details
    # ------------------------------------------------------------------

    @property
    def resolved(self) -> ResolvedConfig:
        """A deep copy of the resolved configuration."""
        return copy.deepcopy(self._resolved)

    @property
    def source(self) -> ResolutionSource:
        """The source the configuration was resolved from."""
        return self._source

    def is_on_platform(self) -> bool:
        """Return ``True`` if the configuration came from the platform."""
        return self._resolved.is_on_platform

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def get_application_name(self) -> str:
        return self._resolved.application.name

    def get_application_version(self) -> int:
        return self._resolved.application.version

    def get_workspace_name(self) -> str:
        return self._resolved.application.workspace_name

    def get_workspace_stub(self) -> str:
        """
        Return the workspace stub: a URL friendly version of the workspace
        name, supplied by whoever set up the workspace.
        """
        return self._resolved.application.workspace_stub

    def get_port(self) -> int:
        """Return the TCP port the application should listen on."""
        return self._resolved.port

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def get_node_tags(self) -> dict[str, Any]:
        return copy.deepcopy(self._resolved.node_tags)

    def get_workspace_tags(self) -> dict[str, Any]:
        return copy.deepcopy(self._resolved.workspace_tags)

    def get_environment_name(self, default: str) -> str:
        """
        Return the deployment environment name, or *default*.

        Looks for the environment tag (``APP_ENV`` unless configured
        otherwise) on the workspace.
        """
        return self._resolved.workspace_tags.get(self._environment_tag, default)

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def get_all_services(self) -> dict[str, dict[str, Any]]:
        """Return every service available to the application, keyed by name."""
        return copy.deepcopy(self._resolved.services)

    def get_service(self, name: str) -> dict[str, Any]:
        """
        Return the credentials for the service called *name*.

        Raises:
            ServiceNotFound: If no such service was declared.
        """
        if name not in self._resolved.services:
            raise ServiceNotFound(name)
        return copy.deepcopy(self._resolved.services[name])

    def export_environment(self, prefix: str = DEFAULT_PREFIX) -> dict[str, str]:
        """
        Return service credentials as ``<PREFIX>__<SERVICE>__<KEY>``
        environment-variable style names.

        Nothing is written to ``os.environ``.
        """
        return export_service_environment(self._resolved.services, prefix)
