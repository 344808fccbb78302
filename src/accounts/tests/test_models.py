import pytest
from django.db import IntegrityError

from accounts.models import Attendee, ScanRecord

pytestmark = pytest.mark.django_db


def test_email_is_stored_lowercase(django_user_model: type[Attendee]) -> None:
    attendee = django_user_model.objects.create_user(username="MiXeD@Example.com", email="MiXeD@Example.com")
    attendee.refresh_from_db()
    assert attendee.email == "mixed@example.com"


def test_email_unique_case_insensitively(django_user_model: type[Attendee]) -> None:
    """Two attendees cannot share an email even when the case differs."""
    django_user_model.objects.create_user(username="one", email="dup@example.com")
    with pytest.raises(IntegrityError):
        # bypass save() normalization to hit the functional constraint directly
        django_user_model.objects.bulk_create([Attendee(username="two", email="DUP@example.com")])


def test_phone_number_is_normalized(django_user_model: type[Attendee]) -> None:
    attendee = django_user_model.objects.create_user(username="p@example.com", phone_number="+91 (987) 654-3210")
    assert attendee.phone_number == "+919876543210"


def test_new_attendee_is_not_admitted(participant: Attendee) -> None:
    assert participant.role == Attendee.Role.PARTICIPANT
    assert participant.is_admitted is False
    assert participant.scan_count == 0
    assert not participant.scan_history.exists()


@pytest.mark.parametrize(
    "first_name,last_name,username,expected",
    [
        ("Asha", "Rao", "asha@example.com", "Asha Rao"),
        ("", "", "ravi_kumar@example.com", "Ravi Kumar"),
    ],
)
def test_display_name(first_name: str, last_name: str, username: str, expected: str) -> None:
    assert Attendee(first_name=first_name, last_name=last_name, username=username).display_name == expected


def test_scan_record_str(participant: Attendee, staff: Attendee) -> None:
    record = ScanRecord.objects.create(attendee=participant, scanned_by=staff, result=ScanRecord.Result.ALLOWED)
    assert str(record).startswith(f"allowed scan of {participant.id}")
