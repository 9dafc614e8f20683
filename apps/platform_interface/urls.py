"""
apps.platform_interface.urls
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
URL routing for the Platform Interface application.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import PlatformMetadataView

urlpatterns = [
    # GET /api/v1/platform/metadata/
    path(
        "platform/metadata/",
        PlatformMetadataView.as_view(),
        name="platform-metadata",
    ),
]
