"""Password validation glue for attendee sign-up."""

from django.contrib.auth.password_validation import validate_password as _default_validate_password
from django.core.exceptions import ValidationError
from ninja.errors import HttpError

from accounts.models import Attendee


def validate_password(password: str, user: Attendee | None = None) -> None:
    """Run Django's configured validators and surface the first failure as a 400."""
    try:
        _default_validate_password(password, user=user)
    except ValidationError as e:
        raise HttpError(400, e.messages[0])
