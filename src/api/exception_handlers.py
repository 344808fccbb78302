"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest
from ninja.responses import Response

from common.exceptions import ErrorKind, StoreUnavailableError, TurnstileError

logger = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PRECONDITION_FAILED: 412,
    ErrorKind.UNAVAILABLE: 503,
}


def handle_turnstile_error(request: HttpRequest, exc: TurnstileError | t.Type[TurnstileError]) -> Response:
    """Map a domain error to its HTTP status by kind.

    The message is returned verbatim; it names the offending attendee, email or order.
    """
    status = STATUS_BY_KIND[exc.kind]
    log = logger.warning if exc.kind == ErrorKind.UNAVAILABLE else logger.info
    log("domain_error", code=exc.code, kind=exc.kind, path=request.path)
    response = Response(status=status, data={"detail": str(exc), "code": exc.code, "kind": exc.kind})
    if exc.kind == ErrorKind.UNAVAILABLE:
        response["Retry-After"] = "1"
    return response


def handle_store_error(request: HttpRequest, exc: DatabaseError | t.Type[DatabaseError]) -> Response:
    """Report a connectivity failure raised outside the services (lazy querysets, auth lookups) as unavailable."""
    logger.warning("store_unavailable", path=request.path, error=str(exc))
    return handle_turnstile_error(request, StoreUnavailableError())


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    else:
        json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
        json_payload=json_payload,
    )
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.info("VALIDATION_ERROR", path=request.path)
    if hasattr(exc, "error_dict"):
        errors = exc.message_dict
    else:
        errors = {"__all__": exc.messages}
    return Response(status=400, data={"errors": errors})


SENSITIVE_KEYS = {"password", "password1", "password2", "token", "signature", "authorization", "cookie"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
