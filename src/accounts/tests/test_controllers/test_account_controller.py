"""Integration tests for the AccountController and token issuance."""

import typing as t

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts import schema
from accounts.models import Attendee

pytestmark = pytest.mark.django_db


def test_register_success(client: Client, valid_register_payload: schema.RegisterAttendeeSchema) -> None:
    """Sign-up returns the attendee and a usable token pair."""
    url = reverse("api:register-account")
    response = client.post(url, data=valid_register_payload.model_dump_json(), content_type="application/json")

    assert response.status_code == 201
    data = response.json()
    assert data["attendee"]["email"] == "newuser@example.com"
    assert data["attendee"]["role"] == "participant"
    assert data["attendee"]["is_admitted"] is False

    me = Client(HTTP_AUTHORIZATION=f"Bearer {data['token']['access']}").get(reverse("api:me"))
    assert me.status_code == 200
    assert me.json()["email"] == "newuser@example.com"


def test_register_duplicate_email(client: Client, valid_register_payload: schema.RegisterAttendeeSchema) -> None:
    url = reverse("api:register-account")
    client.post(url, data=valid_register_payload.model_dump_json(), content_type="application/json")
    payload = valid_register_payload.model_copy(update={"email": "newuser@EXAMPLE.com"})

    response = client.post(url, data=payload.model_dump_json(), content_type="application/json")

    assert response.status_code == 409
    assert response.json()["code"] == "email_already_in_use"


def test_register_password_mismatch(client: Client, valid_register_payload: schema.RegisterAttendeeSchema) -> None:
    """Mismatched passwords are rejected by the schema."""
    payload = valid_register_payload.model_dump()
    payload["password2"] = "something-else"
    url = reverse("api:register-account")

    response = client.post(url, data=orjson.dumps(payload), content_type="application/json")

    assert response.status_code == 422
    assert "Passwords do not match" in response.json()["detail"][0]["msg"]


def test_me_requires_auth(client: Client) -> None:
    assert client.get(reverse("api:me")).status_code == 401


def test_update_profile(participant_client: Client, participant: Attendee) -> None:
    payload = {"first_name": "Meera", "last_name": "Iyer", "phone_number": "+91 99999 88888"}

    url = reverse("api:update-profile")
    response = participant_client.put(url, data=orjson.dumps(payload), content_type="application/json")

    assert response.status_code == 200
    participant.refresh_from_db()
    assert participant.first_name == "Meera"
    assert participant.phone_number == "+919999988888"


def test_update_profile_rejects_bad_phone(participant_client: Client) -> None:
    payload = {"first_name": "Meera", "last_name": "Iyer", "phone_number": "call me"}

    url = reverse("api:update-profile")
    response = participant_client.put(url, data=orjson.dumps(payload), content_type="application/json")

    assert response.status_code == 400
    assert "phone_number" in response.json()["errors"]


def test_obtain_token_pair(client: Client, participant: Attendee) -> None:
    payload = {"username": participant.username, "password": "password"}

    url = reverse("api:token_obtain_pair")
    response = client.post(url, data=orjson.dumps(payload), content_type="application/json")

    assert response.status_code == 200
    assert response.json()["access"]
    participant.refresh_from_db()
    assert participant.last_login is not None


def _register_with_code(client: Client, url_name: str, payload: schema.RegisterAttendeeSchema, code: str) -> t.Any:
    data = {**payload.model_dump(), "signup_code": code}
    return client.post(reverse(f"api:{url_name}"), data=orjson.dumps(data), content_type="application/json")


@pytest.mark.parametrize(
    ("url_name", "setting", "role"),
    [
        ("register-staff", "STAFF_SIGNUP_CODE", "staff"),
        ("register-organizer", "ORGANIZER_SIGNUP_CODE", "organizer"),
    ],
)
def test_register_with_signup_code(
    client: Client,
    settings: t.Any,
    valid_register_payload: schema.RegisterAttendeeSchema,
    url_name: str,
    setting: str,
    role: str,
) -> None:
    setattr(settings, setting, "open-sesame")

    response = _register_with_code(client, url_name, valid_register_payload, "open-sesame")

    assert response.status_code == 201
    assert response.json()["attendee"]["role"] == role
    assert Attendee.objects.get(email="newuser@example.com").role == role


def test_register_staff_with_wrong_code(
    client: Client, settings: t.Any, valid_register_payload: schema.RegisterAttendeeSchema
) -> None:
    settings.STAFF_SIGNUP_CODE = "open-sesame"

    response = _register_with_code(client, "register-staff", valid_register_payload, "open-barley")

    assert response.status_code == 403
    assert not Attendee.objects.filter(email="newuser@example.com").exists()


def test_organizer_code_does_not_unlock_staff(
    client: Client, settings: t.Any, valid_register_payload: schema.RegisterAttendeeSchema
) -> None:
    settings.STAFF_SIGNUP_CODE = "staff-code"
    settings.ORGANIZER_SIGNUP_CODE = "organizer-code"

    response = _register_with_code(client, "register-staff", valid_register_payload, "organizer-code")

    assert response.status_code == 403


def test_register_staff_closed_without_configured_code(
    client: Client, settings: t.Any, valid_register_payload: schema.RegisterAttendeeSchema
) -> None:
    settings.STAFF_SIGNUP_CODE = ""

    response = _register_with_code(client, "register-staff", valid_register_payload, "anything")

    assert response.status_code == 403
    assert not Attendee.objects.exists()


def test_register_staff_duplicate_email(
    client: Client,
    settings: t.Any,
    participant: Attendee,
    valid_register_payload: schema.RegisterAttendeeSchema,
) -> None:
    settings.STAFF_SIGNUP_CODE = "open-sesame"
    payload = valid_register_payload.model_copy(update={"email": participant.email})

    response = _register_with_code(client, "register-staff", payload, "open-sesame")

    assert response.status_code == 409
    participant.refresh_from_db()
    assert participant.role == Attendee.Role.PARTICIPANT


def test_lookup_by_email(staff_client: Client, participant: Attendee) -> None:
    response = staff_client.get(reverse("api:lookup-attendee"), {"email": "PARTICIPANT@example.com"})

    assert response.status_code == 200
    assert response.json()["id"] == str(participant.id)
    assert response.json()["display_name"] == participant.display_name
    assert "phone_number" not in response.json()


def test_lookup_unknown_email(participant_client: Client) -> None:
    response = participant_client.get(reverse("api:lookup-attendee"), {"email": "nobody@example.com"})

    assert response.status_code == 404
    assert response.json()["code"] == "unknown_attendee"


def test_lookup_requires_auth(client: Client, participant: Attendee) -> None:
    assert client.get(reverse("api:lookup-attendee"), {"email": participant.email}).status_code == 401
