"""Registration, team and payment schemas."""

import typing as t
from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, EmailStr, Field

from accounts.schema import MinimalAttendeeSchema
from common.schema import OneToOneFiftyString
from events.models import Registration, TeamMember

from .activity import MinimalActivitySchema


class TeamMemberSchema(ModelSchema):
    class Meta:
        model = TeamMember
        fields = ["name", "email", "phone_number"]


class RegistrationSchema(ModelSchema):
    id: UUID4
    activity: MinimalActivitySchema
    attendee: MinimalAttendeeSchema
    payment_status: Registration.PaymentStatus
    amount: Decimal
    team_members: list[TeamMemberSchema]
    is_team: bool
    team_size: int

    class Meta:
        model = Registration
        fields = ["id", "payment_status", "amount", "team_name", "created_at"]


class RegistrationViewSchema(Schema):
    registration: RegistrationSchema
    as_team_member: bool = False


class MyRegistrationsSchema(Schema):
    direct: list[RegistrationSchema]
    team: list[RegistrationSchema]


class TeamCreateSchema(Schema):
    team_name: OneToOneFiftyString
    member_emails: list[EmailStr] = Field(default_factory=list)


class TeamMemberAddSchema(Schema):
    email: EmailStr


PaymentOutcomeLiteral = t.Literal["succeeded", "failed"]


class PendingPaymentSchema(Schema):
    """Sent by the gateway once it has opened a checkout order."""

    activity_id: UUID4
    attendee_id: UUID4
    order_id: str = Field(..., min_length=1, max_length=255)
    signature: str


class PaymentOutcomeSchema(Schema):
    order_id: str = Field(..., min_length=1, max_length=255)
    payment_id: str = Field("", max_length=255)
    outcome: PaymentOutcomeLiteral
    signature: str


class PaymentStatusSchema(Schema):
    order_id: str
    activity: MinimalActivitySchema
    payment_status: Registration.PaymentStatus
    amount: Decimal
    currency: str
