"""
common.middleware
~~~~~~~~~~~~~~~~~
Structured JSON request-logging middleware powered by structlog.

Binds the resolved application identity into structlog's context vars so
every record emitted while handling a request carries it, then logs method,
path, status_code and duration_ms once the response is ready.
"""
import time

import structlog

from apps.platform_interface.apps import get_resolver

logger = structlog.get_logger(__name__)


class StructuredLoggingMiddleware:
    """
    WSGI middleware that emits one structured log record per HTTP request.

    Context bound for the duration of the request:
        application – application name
        version     – application version
        workspace   – workspace stub

    Log record fields:
        event       – "http_request"
        method      – HTTP verb (GET, POST, …)
        path        – URL path
        status      – HTTP response status code (int)
        duration_ms – Round-trip duration in milliseconds (float, 2 dp)
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        resolver = get_resolver()
        if resolver is not None:
            structlog.contextvars.bind_contextvars(
                application=resolver.get_application_name(),
                version=resolver.get_application_version(),
                workspace=resolver.get_workspace_stub(),
            )

        start = time.monotonic()
        try:
            response = self.get_response(request)
            duration_ms = round((time.monotonic() - start) * 1000, 2)

            logger.info(
                "http_request",
                method=request.method,
                path=request.get_full_path(),
                status=response.status_code,
                duration_ms=duration_ms,
            )
        finally:
            structlog.contextvars.unbind_contextvars("application", "version", "workspace")
        return response
