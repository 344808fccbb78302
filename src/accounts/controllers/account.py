"""This module contains the controllers for the attendee directory."""

import structlog
from ninja import Query, Schema
from ninja.errors import HttpError
from ninja_extra import api_controller, route, status
from ninja_jwt.schema import TokenObtainPairOutputSchema
from pydantic import EmailStr

from accounts import schema
from accounts.models import Attendee
from accounts.service import account as account_service
from accounts.service.auth import get_token_pair_for_user
from common.authentication import AttendeeJWTAuth
from common.controllers import UserAwareController
from common.schema import ErrorResponse
from common.throttling import AuthThrottle

logger = structlog.get_logger(__name__)


class RegisterResponseSchema(Schema):
    attendee: schema.AttendeeSchema
    token: TokenObtainPairOutputSchema


class LookupFilter(Schema):
    email: EmailStr


def _registered(attendee: Attendee) -> tuple[int, RegisterResponseSchema]:
    return status.HTTP_201_CREATED, RegisterResponseSchema(
        attendee=schema.AttendeeSchema.from_orm(attendee), token=get_token_pair_for_user(attendee)
    )


def _register_with_code(payload: schema.CodeRegisterAttendeeSchema, role: Attendee.Role) -> Attendee:
    if not account_service.signup_code_matches(role, payload.signup_code):
        logger.warning("signup_code_rejected", role=role)
        raise HttpError(403, "Invalid signup code.")
    return account_service.register_attendee(payload, role=role)


@api_controller("/accounts", tags=["Account"], throttle=AuthThrottle())
class AccountController(UserAwareController):
    @route.post(
        "/register",
        response={201: RegisterResponseSchema, 409: ErrorResponse},
        url_name="register-account",
    )
    def register(self, payload: schema.RegisterAttendeeSchema) -> tuple[int, RegisterResponseSchema]:
        """Sign up as a participant.

        Emails are unique regardless of case; signing up twice with the same address returns 409.
        On success the response carries a token pair so the attendee can act immediately.
        """
        return _registered(account_service.register_attendee(payload))

    @route.post(
        "/register/staff",
        response={201: RegisterResponseSchema, 409: ErrorResponse},
        url_name="register-staff",
    )
    def register_staff(self, payload: schema.CodeRegisterAttendeeSchema) -> tuple[int, RegisterResponseSchema]:
        """Sign up as gate staff with the staff signup code. A wrong or unconfigured code returns 403."""
        return _registered(_register_with_code(payload, Attendee.Role.STAFF))

    @route.post(
        "/register/organizer",
        response={201: RegisterResponseSchema, 409: ErrorResponse},
        url_name="register-organizer",
    )
    def register_organizer(self, payload: schema.CodeRegisterAttendeeSchema) -> tuple[int, RegisterResponseSchema]:
        """Sign up as an organizer with the organizer signup code."""
        return _registered(_register_with_code(payload, Attendee.Role.ORGANIZER))

    @route.get("/me", response=schema.AttendeeSchema, url_name="me", auth=AttendeeJWTAuth())
    def me(self) -> Attendee:
        """Retrieve the authenticated attendee's profile, including whether they have been admitted."""
        return self.user()

    @route.put("/me", response=schema.AttendeeSchema, url_name="update-profile", auth=AttendeeJWTAuth())
    def update_profile(self, payload: schema.ProfileUpdateSchema) -> Attendee:
        """Update name and contact number.

        Team rosters keep the snapshot taken when the attendee was added; they are not rewritten.
        """
        user = self.user()
        for key, value in payload.dict().items():
            setattr(user, key, value)
        user.full_clean(exclude=["password", "username", "email"], validate_unique=False, validate_constraints=False)
        user.save(update_fields=list(payload.dict().keys()))
        return user

    @route.get("/lookup", response=schema.MinimalAttendeeSchema, url_name="lookup-attendee", auth=AttendeeJWTAuth())
    def lookup(self, params: LookupFilter = Query(...)) -> Attendee:  # type: ignore[type-arg]
        """Find an attendee by email, regardless of case, to invite them to a team."""
        return account_service.get_attendee_by_email(params.email)
