"""
Test settings – outside the platform, resolve the configuration from the
checked-in fixture file.
"""
from .base import *  # noqa: F401, F403

DEBUG = False

PLATFORM_INTERFACE = {
    **PLATFORM_INTERFACE,  # noqa: F405
    "OVERRIDE_PATHS": [BASE_DIR / "tests" / "fixtures" / "platform_interface.json"],  # noqa: F405
    "YAML_SUPPORT": True,
    "EXPORT_TO_ENVIRON": False,
}
