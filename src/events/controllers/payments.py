import structlog
from django.conf import settings
from ninja.errors import HttpError
from ninja_extra import api_controller, route

from accounts.service import account as account_service
from common.authentication import AttendeeJWTAuth
from common.controllers import UserAwareController
from common.signing import verify_signature
from events import schema
from events.models import Registration
from events.service import registration_service
from events.service.registration_service import PaymentOutcome

logger = structlog.get_logger(__name__)


def _status(registration: Registration) -> schema.PaymentStatusSchema:
    return schema.PaymentStatusSchema(
        order_id=registration.gateway_order_id or "",
        activity=schema.MinimalActivitySchema.from_orm(registration.activity),
        payment_status=registration.payment_status,
        amount=registration.amount,
        currency=settings.PAYMENT_CURRENCY,
    )


@api_controller("/payments", tags=["Payments"])
class PaymentController(UserAwareController):
    """Callbacks from the payment gateway, plus a status lookup for attendees.

    Gateway callbacks carry no bearer token; they are authenticated by an HMAC
    signature over their fields instead.
    """

    @route.post(
        "/pending", url_name="open_pending_registration", response={201: schema.PaymentStatusSchema}, auth=None
    )
    def open_pending(self, payload: schema.PendingPaymentSchema) -> tuple[int, schema.PaymentStatusSchema]:
        """Record the checkout order the gateway opened for an attendee and a paid activity.

        Signature fields: `activity_id|attendee_id|order_id`.
        """
        fields = (str(payload.activity_id), str(payload.attendee_id), payload.order_id)
        if not verify_signature(payload.signature, *fields):
            logger.warning("payment_signature_invalid", order_id=payload.order_id, callback="pending")
            raise HttpError(400, "Invalid payment signature.")
        attendee = account_service.get_attendee(payload.attendee_id)
        registration = registration_service.open_pending_registration(payload.activity_id, attendee, payload.order_id)
        return 201, _status(registration)

    @route.post("/outcome", url_name="apply_payment_outcome", response=schema.PaymentStatusSchema, auth=None)
    def apply_outcome(self, payload: schema.PaymentOutcomeSchema) -> schema.PaymentStatusSchema:
        """Settle a pending order as succeeded or failed.

        Signature fields: `order_id|payment_id|outcome`. Delivering the same outcome again returns 409
        and leaves the registration unchanged, so the gateway may retry freely.
        """
        if not verify_signature(payload.signature, payload.order_id, payload.payment_id, payload.outcome):
            logger.warning("payment_signature_invalid", order_id=payload.order_id, callback="outcome")
            raise HttpError(400, "Invalid payment signature.")
        registration = registration_service.apply_payment_outcome_for_order(
            payload.order_id, PaymentOutcome(payload.outcome), payload.payment_id
        )
        return _status(registration)

    @route.get(
        "/{order_id}", url_name="get_payment_status", response=schema.PaymentStatusSchema, auth=AttendeeJWTAuth()
    )
    def get_payment_status(self, order_id: str) -> schema.PaymentStatusSchema:
        """Check the status of one of your own orders."""
        return _status(registration_service.get_payment_status(order_id, self.user()))
