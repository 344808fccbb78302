"""Attendee directory: sign-up and lookup."""

import hmac
import typing as t
from uuid import UUID

import structlog
from django.conf import settings
from django.db import IntegrityError, transaction

from accounts import schema
from accounts.exceptions import EmailAlreadyInUseError, UnknownAttendeeError
from accounts.models import Attendee, normalize_email
from common.store import translate_store_errors

logger = structlog.get_logger(__name__)

SIGNUP_CODE_SETTINGS: dict[Attendee.Role, str] = {
    Attendee.Role.STAFF: "STAFF_SIGNUP_CODE",
    Attendee.Role.ORGANIZER: "ORGANIZER_SIGNUP_CODE",
}


@translate_store_errors
def register_attendee(
    payload: schema.RegisterAttendeeSchema, role: Attendee.Role = Attendee.Role.PARTICIPANT
) -> Attendee:
    """Create an attendee.

    Email uniqueness is case-insensitive and enforced by the database, so two
    concurrent sign-ups with the same address yield one attendee and one
    ``EmailAlreadyInUseError``.
    """
    email = normalize_email(payload.email)
    logger.info("attendee_registration_started", email=email, role=role)
    try:
        with transaction.atomic():
            attendee = Attendee.objects.create_user(
                username=email,
                email=email,
                password=payload.password1,
                first_name=payload.first_name,
                last_name=payload.last_name,
                phone_number=payload.phone_number,
                role=role,
            )
    except IntegrityError:
        logger.warning("attendee_registration_duplicate", email=email)
        raise EmailAlreadyInUseError(email=email)
    logger.info("attendee_registration_completed", attendee_id=str(attendee.id), email=email)
    return attendee


@translate_store_errors
def get_attendee(attendee_id: UUID | str) -> Attendee:
    """Fetch an attendee by its opaque identifier.

    Any string is accepted; one that is not a valid identifier is simply unknown.
    """
    try:
        pk = attendee_id if isinstance(attendee_id, UUID) else UUID(str(attendee_id))
    except ValueError:
        raise UnknownAttendeeError(identifier=attendee_id)
    if attendee := Attendee.objects.filter(pk=pk).first():
        return attendee
    raise UnknownAttendeeError(identifier=attendee_id)


@translate_store_errors
def get_attendee_by_email(email: str) -> Attendee:
    """Case-insensitive lookup by email."""
    if attendee := t.cast(Attendee | None, Attendee.objects.by_email(email).first()):
        return attendee
    raise UnknownAttendeeError(identifier=normalize_email(email))


def signup_code_matches(role: Attendee.Role, code: str) -> bool:
    """Whether ``code`` unlocks sign-up for ``role``.

    Only staff and organizers sign up with a code. A role whose code is not configured is closed.
    """
    setting = SIGNUP_CODE_SETTINGS.get(role)
    configured = getattr(settings, setting, "") if setting else ""
    if not configured:
        return False
    return hmac.compare_digest(configured.encode(), code.encode())
