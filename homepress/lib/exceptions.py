"""Error taxonomy and the JSON exception handlers that surface it over HTTP."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from litestar import Request, Response
from litestar.exceptions import HTTPException
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

logger = logging.getLogger(__name__)


class HomepressError(Exception):
    """Base class for errors raised by homepress."""


class ValidationError(HomepressError):
    """A mutation was rejected before anything was written."""


class PermissionDenied(HomepressError):
    """The acting user lacks the capability required for a mutation."""


class StoreError(HomepressError):
    """A read against the backing store failed."""


@dataclass(frozen=True)
class FailedWrite:
    entity_type: str
    entity_id: int
    field: str
    value: int


class PersistenceFailure(HomepressError):
    """One or more independent writes failed.

    Reported once for the whole batch. Local state is left as it was after
    the move; callers re-fetch to resynchronize.
    """

    def __init__(self, message: str, failures: list[FailedWrite] | None = None) -> None:
        super().__init__(message)
        self.failures = failures or []


def _json(status_code: int, detail: str) -> Response:
    return Response(
        content={"status_code": status_code, "detail": detail},
        status_code=status_code,
        media_type="application/json",
    )


def validation_error_handler(request: Request, exc: ValidationError) -> Response:
    return _json(HTTP_400_BAD_REQUEST, str(exc))


def permission_denied_handler(request: Request, exc: PermissionDenied) -> Response:
    return _json(HTTP_403_FORBIDDEN, str(exc) or "Permission denied")


def persistence_failure_handler(request: Request, exc: PersistenceFailure) -> Response:
    """Recoverable: the administrator is invited to retry or refresh."""
    logger.warning(
        "Persistence failure on %s %s: %d write(s) failed",
        request.method,
        request.url.path,
        len(exc.failures),
    )
    return _json(
        HTTP_503_SERVICE_UNAVAILABLE,
        f"{exc} Please retry, or refresh to reload the saved order.",
    )


def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _json(exc.status_code, detail)


def internal_server_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _json(HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


EXCEPTION_HANDLERS = {
    ValidationError: validation_error_handler,
    PermissionDenied: permission_denied_handler,
    PersistenceFailure: persistence_failure_handler,
    HTTPException: http_exception_handler,
    Exception: internal_server_error_handler,
}
