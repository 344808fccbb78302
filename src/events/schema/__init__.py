"""Events schema package.

Schemas are grouped into modules that mirror the models package and re-exported here.
"""

from .activity import (
    ActivityCreateSchema,
    ActivityFilterSchema,
    ActivitySchema,
    ActivityUpdateSchema,
    MinimalActivitySchema,
)
from .registration import (
    MyRegistrationsSchema,
    PaymentOutcomeLiteral,
    PaymentOutcomeSchema,
    PaymentStatusSchema,
    PendingPaymentSchema,
    RegistrationSchema,
    RegistrationViewSchema,
    TeamCreateSchema,
    TeamMemberAddSchema,
    TeamMemberSchema,
)

__all__ = [
    "ActivityCreateSchema",
    "ActivityFilterSchema",
    "ActivitySchema",
    "ActivityUpdateSchema",
    "MinimalActivitySchema",
    "MyRegistrationsSchema",
    "PaymentOutcomeLiteral",
    "PaymentOutcomeSchema",
    "PaymentStatusSchema",
    "PendingPaymentSchema",
    "RegistrationSchema",
    "RegistrationViewSchema",
    "TeamCreateSchema",
    "TeamMemberAddSchema",
    "TeamMemberSchema",
]
