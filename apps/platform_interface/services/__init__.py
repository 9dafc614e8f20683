"""
apps.platform_interface.services package.
"""
from .config_resolver import ConfigResolver  # noqa: F401
from .config_validator import ApplicationInfo, ResolvedConfig  # noqa: F401
from .env_export import export_service_environment  # noqa: F401
from .sources import LocalFileSource, PlatformSource  # noqa: F401
