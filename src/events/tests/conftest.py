import typing as t

import pytest

from accounts.models import Attendee
from events.models import Activity, Registration

if t.TYPE_CHECKING:
    from conftest import AttendeeFactory

PaidRegistrationFactory = t.Callable[[Activity, Attendee], Registration]


@pytest.fixture
def leader(attendee_factory: "AttendeeFactory") -> Attendee:
    return attendee_factory(email="leader@example.com", first_name="Lata", last_name="Menon")


@pytest.fixture
def paid_leader(
    leader: Attendee, team_activity: Activity, paid_registration_factory: PaidRegistrationFactory
) -> Attendee:
    paid_registration_factory(team_activity, leader)
    return leader


@pytest.fixture
def paid_members(
    attendee_factory: "AttendeeFactory", team_activity: Activity, paid_registration_factory: PaidRegistrationFactory
) -> list[Attendee]:
    """Five attendees, each with their own paid registration for the team activity."""
    members = [attendee_factory(email=f"member{i}@example.com") for i in range(1, 6)]
    for member in members:
        paid_registration_factory(team_activity, member)
    return members
