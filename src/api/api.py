from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import InterfaceError, OperationalError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.account import AccountController
from accounts.controllers.auth import AuthController
from checkin.controllers import CheckinController
from common.exceptions import TurnstileError
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers.activities import ActivityController
from events.controllers.payments import PaymentController
from events.controllers.registrations import ActivityRegistrationController, MyRegistrationsController
from events.controllers.teams import TeamController

from .exception_handlers import (
    handle_django_validation_error,
    handle_general_exception,
    handle_store_error,
    handle_turnstile_error,
)

api = NinjaExtraAPI(
    title="Turnstile API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Turnstile API {settings.VERSION}",
    app_name=f"turnstile-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth/Account controllers
    AuthController,
    AccountController,
    # Catalog, registration and team controllers
    ActivityController,
    ActivityRegistrationController,
    MyRegistrationsController,
    TeamController,
    PaymentController,
    # Entry gate
    CheckinController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    OperationalError: handle_store_error,
    InterfaceError: handle_store_error,
    TurnstileError: handle_turnstile_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
