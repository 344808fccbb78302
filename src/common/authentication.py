import typing as t

import structlog
from django.http import HttpRequest
from ninja_jwt.authentication import JWTAuth


class AttendeeJWTAuth(JWTAuth):
    """JWT authentication that binds the attendee to the logging context.

    Every log line emitted while handling the request carries ``attendee_id`` and
    ``role``, so scans and team changes can be traced back to who made them.

    Usage:
        @route.get("/endpoint", auth=AttendeeJWTAuth())
        def my_endpoint(self):
            logger.info("something_happened")  # includes attendee_id and role
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and bind the attendee to structlog's contextvars."""
        user = super().authenticate(request, token)
        if user:
            structlog.contextvars.bind_contextvars(
                attendee_id=str(user.pk),
                role=getattr(user, "role", None),
            )
        return user
