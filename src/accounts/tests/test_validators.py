import pytest
from django.core.exceptions import ValidationError

from accounts.validators import normalize_phone_number, validate_phone_number


@pytest.mark.parametrize("value", ["", None, "+919876543210", "98765 43210", "(022) 2345-6789"])
def test_valid_phone_numbers(value: str | None) -> None:
    validate_phone_number(value)


@pytest.mark.parametrize("value", ["abc", "12345", "+91 98765 43210 12345 678"])
def test_invalid_phone_numbers(value: str) -> None:
    with pytest.raises(ValidationError):
        validate_phone_number(value)


def test_normalize_phone_number() -> None:
    assert normalize_phone_number("+91 (987) 654-3210") == "+919876543210"
