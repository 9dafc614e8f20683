"""
apps.platform_interface.apps

The platform configuration is resolved once, when Django finishes loading
apps.  A resolution failure propagates out of ``ready()`` and aborts startup.
"""
import os

import structlog
from django.apps import AppConfig, apps
from django.conf import settings

logger = structlog.get_logger(__name__)


class PlatformInterfaceConfig(AppConfig):
    name = "apps.platform_interface"
    label = "platform_interface"
    verbose_name = "Platform Interface"

    resolver = None

    def ready(self):
        from .services.config_resolver import ConfigResolver

        options = getattr(settings, "PLATFORM_INTERFACE", {})
        self.resolver = ConfigResolver(
            options.get("OVERRIDE_PATHS", []),
            yaml_support=options.get("YAML_SUPPORT", False),
            environment_tag=options.get("ENVIRONMENT_TAG", "APP_ENV"),
        )

        if options.get("EXPORT_TO_ENVIRON", False):
            exported = self.resolver.export_environment(options.get("EXPORT_PREFIX", "PM"))
            os.environ.update(exported)
            logger.info("platform_services_exported", count=len(exported))


def get_resolver():
    """Return the :class:`ConfigResolver` built at startup."""
    return apps.get_app_config("platform_interface").resolver
