"""
common.exceptions
~~~~~~~~~~~~~~~~~
Centralised DRF exception handler and custom exception classes.

Platform configuration errors raised inside a host project's views are
translated into :class:`AppError` responses.  The metadata endpoint never
looks up credentials; the mapping is for host views that call
``get_resolver().get_service(name)``, where
:class:`~apps.platform_interface.exceptions.ServiceNotFound` becomes a 404.
"""
import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.platform_interface.exceptions import ConfigError, ServiceNotFound

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base application error.  Subclass to define domain-specific errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_code: str = "error"
    default_detail: str = "An error occurred."

    def __init__(self, detail: str | None = None, code: str | None = None) -> None:
        self.detail = detail or self.default_detail
        self.code = code or self.default_code

    def __str__(self) -> str:
        return self.detail


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_detail = "The requested resource was not found."


class ConfigurationError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "configuration_error"
    default_detail = "The platform configuration is invalid."


def _from_config_error(exc: ConfigError) -> AppError:
    if isinstance(exc, ServiceNotFound):
        return NotFoundError(detail=exc.detail, code=exc.code)
    return ConfigurationError(detail=exc.detail, code=exc.code)


def custom_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    Global DRF exception handler.
    Converts AppError subclasses (and ConfigError, via AppError) to JSON
    responses and delegates everything else to the default DRF handler so
    standard DRF exceptions still work.
    """
    if isinstance(exc, ConfigError):
        exc = _from_config_error(exc)

    if isinstance(exc, AppError):
        logger.warning(
            "app_error",
            code=exc.code,
            detail=exc.detail,
            status_code=exc.status_code,
        )
        return Response(
            {"code": exc.code, "detail": exc.detail},
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        logger.warning(
            "drf_error",
            detail=response.data,
            status_code=response.status_code,
        )
    else:
        logger.exception("unhandled_exception", exc_info=exc)

    return response
