"""Domain errors are mapped to HTTP statuses by kind."""

from unittest.mock import MagicMock, patch

import orjson
import pytest
from django.core.exceptions import ValidationError
from django.db import InterfaceError, OperationalError
from django.db.models.query import QuerySet
from django.test.client import Client
from django.urls import reverse

from accounts.exceptions import EmailAlreadyInUseError, UnknownAttendeeError
from api.exception_handlers import (
    handle_django_validation_error,
    handle_store_error,
    handle_turnstile_error,
    obfuscate,
)
from common.exceptions import StoreUnavailableError
from events.exceptions import PaymentRequiredError
from events.models import Activity

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (EmailAlreadyInUseError(email="a@example.com"), 409),
        (UnknownAttendeeError(identifier="x"), 404),
        (PaymentRequiredError(), 412),
        (StoreUnavailableError(), 503),
    ],
)
def test_status_by_kind(exc: Exception, status: int) -> None:
    request = MagicMock(path="/api/test")

    response = handle_turnstile_error(request, exc)  # type: ignore[arg-type]

    assert response.status_code == status
    assert orjson.loads(response.content)["detail"] == str(exc)


def test_unavailable_asks_to_retry() -> None:
    response = handle_turnstile_error(MagicMock(path="/api/test"), StoreUnavailableError())

    assert response["Retry-After"] == "1"


def test_validation_error_with_fields() -> None:
    response = handle_django_validation_error(
        MagicMock(path="/api/test"), ValidationError({"team_name": "Team name is required."})
    )

    assert response.status_code == 400
    assert orjson.loads(response.content) == {"errors": {"team_name": ["Team name is required."]}}


def test_validation_error_without_fields() -> None:
    response = handle_django_validation_error(MagicMock(path="/api/test"), ValidationError("Nope."))

    assert orjson.loads(response.content) == {"errors": {"__all__": ["Nope."]}}


def test_obfuscate() -> None:
    data = {"email": "a@example.com", "Password1": "secret", "signature": "abc"}

    assert obfuscate(data) == {"email": "a@example.com", "Password1": "********", "signature": "********"}
    assert data["Password1"] == "secret"


def test_store_outage_returns_503(participant_client: Client, free_activity: Activity) -> None:
    url = reverse("api:create_registration", kwargs={"activity_id": free_activity.id})

    with patch("events.service.registration_service.Registration.objects.create", side_effect=OperationalError):
        response = participant_client.post(url)

    assert response.status_code == 503
    assert response.json()["code"] == "store_unavailable"
    assert response["Retry-After"] == "1"


def test_unexpected_error_returns_500(client: Client) -> None:
    with patch("api.api.VersionResponse", side_effect=RuntimeError("boom")):
        response = client.get(reverse("api:version"))

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error."


def test_outage_while_reading_a_listing_returns_503(participant_client: Client) -> None:
    with patch.object(QuerySet, "_fetch_all", side_effect=OperationalError("connection refused")):
        response = participant_client.get(reverse("api:my_registrations"))

    assert response.status_code == 503
    assert response.json()["code"] == "store_unavailable"
    assert response["Retry-After"] == "1"


def test_store_error_handler_reports_unavailable() -> None:
    response = handle_store_error(MagicMock(path="/api/test"), InterfaceError("connection already closed"))

    assert response.status_code == 503
    assert orjson.loads(response.content)["kind"] == "unavailable"
