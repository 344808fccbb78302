from common.exceptions import ConflictError, NotFoundError


class UnknownAttendeeError(NotFoundError):
    """Raised when no attendee matches the given identifier or email."""

    code = "unknown_attendee"
    default_message = '"{identifier}" is not registered on the website.'


class EmailAlreadyInUseError(ConflictError):
    """Raised when signing up with an email that is already taken (case-insensitively)."""

    code = "email_already_in_use"
    default_message = 'An attendee with the email "{email}" already exists.'
