import pytest

from accounts import schema


@pytest.fixture
def valid_register_payload() -> schema.RegisterAttendeeSchema:
    """Provides a valid payload for the sign-up endpoint."""
    return schema.RegisterAttendeeSchema(
        email="NewUser@Example.com",
        password1="a-strong-password-123",
        password2="a-strong-password-123",
        first_name="New",
        last_name="User",
        phone_number="+91 98765 43210",
    )
