"""Schema for accounts module."""

import typing as t

from ninja import ModelSchema, Schema
from pydantic import UUID4, EmailStr, Field, model_validator

from accounts.password_validation import validate_password
from common.schema import StrippedString

from .models import Attendee


class AttendeeSchema(ModelSchema):
    id: UUID4
    email: str
    first_name: str
    last_name: str
    phone_number: str
    role: Attendee.Role
    is_admitted: bool
    display_name: str

    class Meta:
        model = Attendee
        fields = ["email", "first_name", "last_name", "phone_number", "role", "is_admitted"]


class MinimalAttendeeSchema(ModelSchema):
    display_name: str

    class Meta:
        model = Attendee
        fields = ["id", "email", "first_name", "last_name"]


class PasswordMixin(Schema):
    password1: str = Field(..., description="Password", min_length=6, max_length=150)
    password2: str = Field(..., description="Password confirmation", min_length=6, max_length=150)

    @model_validator(mode="after")
    def password_match(self) -> t.Self:
        """Validate that the passwords match."""
        if self.password1 != self.password2:
            raise ValueError("Passwords do not match")
        return self


class RegisterAttendeeSchema(PasswordMixin):
    email: EmailStr
    first_name: StrippedString = ""
    last_name: StrippedString = ""
    phone_number: StrippedString = Field("", max_length=20)

    @model_validator(mode="after")
    def validate_password(self) -> t.Self:
        """Validate the password."""
        tmp_user = Attendee(email=self.email, username=self.email, first_name=self.first_name, last_name=self.last_name)
        validate_password(self.password1, user=tmp_user)
        return self


class CodeRegisterAttendeeSchema(RegisterAttendeeSchema):
    signup_code: str = Field(..., min_length=1, max_length=255)


class ProfileUpdateSchema(Schema):
    first_name: str = Field(..., max_length=150)
    last_name: str = Field(..., max_length=150)
    phone_number: StrippedString = Field("", max_length=20)
