"""
apps.platform_interface.views
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Thin, read-only DRF view over the startup platform configuration.

Endpoints
---------
GET    /platform/metadata/    – Application metadata, tags, port and service names
"""
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .apps import get_resolver
from .serializers import PlatformMetadataSerializer


class PlatformMetadataView(APIView):
    """GET /platform/metadata/ – describe the resolved platform configuration."""

    @extend_schema(
        summary="Get Platform Metadata",
        description=(
            "Returns the application metadata, node and workspace tags, listening "
            "port and the names of the configured services, as resolved at startup "
            "from the platform environment or a local override file.  Service "
            "credentials are never included."
        ),
        responses={200: PlatformMetadataSerializer},
        tags=["Platform"],
    )
    def get(self, request: Request) -> Response:
        resolved = get_resolver().resolved
        return Response(
            PlatformMetadataSerializer(resolved).data,
            status=status.HTTP_200_OK,
        )
