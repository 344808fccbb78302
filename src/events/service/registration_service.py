"""Registration ledger.

One registration per (activity, attendee), guarded by a database constraint. Free
activities register directly; paid ones are opened as ``pending`` by the payment
flow and settled by the gateway's outcome, which may be delivered more than once.
"""

import typing as t
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from accounts.models import Attendee
from common.store import translate_store_errors
from events.exceptions import (
    AlreadyFinalizedError,
    AlreadyRegisteredError,
    NotRegisteredError,
    OrderIdInUseError,
    PaymentNotRequiredError,
    PaymentRequiredError,
    UnknownOrderError,
)
from events.models import Registration, TeamMember
from events.service import activity_service

logger = structlog.get_logger(__name__)


class PaymentOutcome(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RegistrationView:
    """A registration as seen by one attendee.

    ``as_team_member`` is set when the attendee is on someone else's team; the
    registration is then the leader's.
    """

    registration: Registration
    as_team_member: bool = False


@translate_store_errors
def create_registration(activity_id: UUID, attendee: Attendee) -> Registration:
    """Register an attendee for a free activity.

    Paid activities are refused with ``PaymentRequiredError``; their registrations are
    opened by the payment flow instead.
    """
    activity = activity_service.get_activity(activity_id)
    if not activity.is_free:
        # Only decides which error the caller sees; nothing is written on this path.
        if Registration.objects.filter(activity=activity, attendee=attendee).exists():
            raise AlreadyRegisteredError()
        raise PaymentRequiredError()

    try:
        with transaction.atomic():
            registration = Registration.objects.create(
                activity=activity,
                attendee=attendee,
                payment_status=Registration.PaymentStatus.PAID,
                amount=0,
                finalized_at=timezone.now(),
            )
            activity.registrants.add(attendee)
    except IntegrityError:
        logger.info("registration_duplicate", activity_id=str(activity.id), attendee_id=str(attendee.id))
        raise AlreadyRegisteredError()

    logger.info("registration_created", activity_id=str(activity.id), attendee_id=str(attendee.id), free=True)
    return registration


@translate_store_errors
@transaction.atomic
def open_pending_registration(activity_id: UUID, attendee: Attendee, order_id: str) -> Registration:
    """Create or reuse the pending registration a gateway checkout order settles.

    A pending or failed registration takes the new order id and goes back to pending;
    a paid one is final.
    """
    activity = activity_service.get_activity(activity_id)
    if activity.is_free:
        raise PaymentNotRequiredError()

    try:
        with transaction.atomic():
            registration, created = Registration.objects.select_for_update().get_or_create(
                activity=activity,
                attendee=attendee,
                defaults={
                    "payment_status": Registration.PaymentStatus.PENDING,
                    "amount": activity.fee,
                    "gateway_order_id": order_id,
                },
            )
            if not created:
                if registration.is_paid:
                    raise AlreadyRegisteredError(message="Already registered and paid.")
                registration.gateway_order_id = order_id
                registration.gateway_payment_id = ""
                registration.payment_status = Registration.PaymentStatus.PENDING
                registration.amount = activity.fee
                registration.finalized_at = None
                registration.save()
    except IntegrityError:
        # Order ids are unique across registrations.
        logger.warning("registration_order_id_in_use", activity_id=str(activity.id), order_id=order_id)
        raise OrderIdInUseError(order_id=order_id)

    logger.info(
        "registration_pending",
        activity_id=str(activity.id),
        attendee_id=str(attendee.id),
        order_id=order_id,
        reopened=not created,
    )
    return registration


def _settle(registration: Registration, outcome: PaymentOutcome, payment_id: str) -> Registration:
    """Apply a gateway outcome to a locked registration.

    ``paid`` is terminal. A failed registration only moves on a later success.
    """
    if registration.is_paid or (
        registration.payment_status == Registration.PaymentStatus.FAILED and outcome == PaymentOutcome.FAILED
    ):
        logger.info(
            "payment_outcome_ignored",
            registration_id=str(registration.id),
            status=registration.payment_status,
            outcome=outcome,
        )
        raise AlreadyFinalizedError()

    registration.finalized_at = timezone.now()
    registration.gateway_payment_id = payment_id or registration.gateway_payment_id
    if outcome == PaymentOutcome.SUCCEEDED:
        registration.payment_status = Registration.PaymentStatus.PAID
        registration.save()
        registration.activity.registrants.add(registration.attendee_id)
    else:
        registration.payment_status = Registration.PaymentStatus.FAILED
        registration.save()

    logger.info(
        "payment_outcome_applied",
        registration_id=str(registration.id),
        status=registration.payment_status,
        payment_id=payment_id,
    )
    return registration


@translate_store_errors
@transaction.atomic
def apply_payment_outcome(
    activity_id: UUID, attendee: Attendee, outcome: PaymentOutcome, payment_id: str = ""
) -> Registration:
    registration = (
        Registration.objects.select_for_update()
        .select_related("activity")
        .filter(activity_id=activity_id, attendee=attendee)
        .first()
    )
    if registration is None:
        raise NotRegisteredError(email=attendee.email)
    return _settle(registration, outcome, payment_id)


@translate_store_errors
@transaction.atomic
def apply_payment_outcome_for_order(order_id: str, outcome: PaymentOutcome, payment_id: str = "") -> Registration:
    """Settle the registration that carries ``order_id``."""
    registration = (
        Registration.objects.select_for_update().select_related("activity").filter(gateway_order_id=order_id).first()
    )
    if registration is None:
        logger.warning("payment_outcome_unknown_order", order_id=order_id)
        raise UnknownOrderError(order_id=order_id)
    return _settle(registration, outcome, payment_id)


@translate_store_errors
def get_payment_status(order_id: str, attendee: Attendee | None = None) -> Registration:
    """Look up a registration by order id, optionally restricted to one attendee's own orders."""
    qs = Registration.objects.select_related("activity").filter(gateway_order_id=order_id)
    if attendee is not None:
        qs = qs.filter(attendee=attendee)
    if registration := qs.first():
        return registration
    raise UnknownOrderError(order_id=order_id)


@translate_store_errors
def get_registration(activity_id: UUID, attendee: Attendee) -> RegistrationView:
    """The attendee's view of their registration for one activity.

    Being on a team takes precedence over the attendee's own registration.
    """
    activity = activity_service.get_activity(activity_id, active_only=False)
    membership = TeamMember.objects.filter(activity=activity, email=attendee.email).first()
    if membership is not None:
        return RegistrationView(
            registration=Registration.objects.full().get(pk=membership.registration_id), as_team_member=True
        )
    if registration := Registration.objects.full().filter(activity=activity, attendee=attendee).first():
        return RegistrationView(registration=registration)
    raise NotRegisteredError(email=attendee.email)


@translate_store_errors
def list_registrations_for_attendee(attendee: Attendee) -> tuple[QuerySet[Registration], QuerySet[Registration]]:
    """Registrations the attendee holds directly, and those of teams they are a member of."""
    direct = Registration.objects.full().filter(attendee=attendee).order_by("-created_at")
    team = Registration.objects.full().filter(team_members__email=attendee.email).order_by("-created_at")
    return direct, team


@translate_store_errors
def list_registrations_for_activity(activity_id: UUID) -> QuerySet[Registration]:
    activity = activity_service.get_activity(activity_id, active_only=False)
    return t.cast(QuerySet[Registration], Registration.objects.full().filter(activity=activity).order_by("-created_at"))
