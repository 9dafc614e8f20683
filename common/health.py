"""
common.health
~~~~~~~~~~~~~
GET /health/ – lightweight liveness probe.

Returns:
    200  {"status": "ok", "mode": "platform"|"local", "application": "<name>",
          "version": <int>}
    503  {"status": "degraded", "mode": "unresolved"} – no resolver is
         registered.  Startup normally aborts when resolution fails, so this
         only answers for a host that catches the ``ready()`` error and keeps
         serving.
"""
import structlog
from django.http import JsonResponse

from apps.platform_interface.apps import get_resolver

logger = structlog.get_logger(__name__)


def health_check(request):
    """Return service health including how the configuration was resolved."""
    resolver = get_resolver()

    if resolver is None:
        logger.error("health_check_config_unresolved")
        return JsonResponse({"status": "degraded", "mode": "unresolved"}, status=503)

    payload = {
        "status": "ok",
        "mode": "platform" if resolver.is_on_platform() else "local",
        "application": resolver.get_application_name(),
        "version": resolver.get_application_version(),
    }
    return JsonResponse(payload, status=200)
