"""Shared fixtures: attendees of every role, activities and authenticated clients."""

import secrets
import string
import threading
import typing as t
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, time, timedelta
from decimal import Decimal

import faker
import pytest
from django.core.cache import cache
from django.db import connection
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken
from pytest import MonkeyPatch

from accounts.models import Attendee
from events.models import Activity, Registration


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits so that tests never trip the throttles."""
    for throttle in ("AnonDefaultThrottle", "UserDefaultThrottle", "AuthThrottle", "WriteThrottle", "ScanThrottle"):
        monkeypatch.setattr(f"common.throttling.{throttle}.rate", "10000/min")


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttle history lives in the cache; start every test with a clean one."""
    cache.clear()


class AttendeeFactory:
    """Factory for creating Attendee instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> Attendee:
        email = kwargs.pop("email", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)) + "@user.test")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        phone_number = kwargs.pop("phone_number", "+91" + "".join(secrets.choice(string.digits) for _ in range(10)))
        return Attendee.objects.create_user(
            username=kwargs.pop("username", email.lower()),
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> Attendee:
        return self.create_user(**kwargs)


@pytest.fixture
def attendee_factory() -> AttendeeFactory:
    return AttendeeFactory()


@pytest.fixture
def participant(attendee_factory: AttendeeFactory) -> Attendee:
    return attendee_factory(email="participant@example.com", first_name="Priya", last_name="Sharma")


@pytest.fixture
def staff(attendee_factory: AttendeeFactory) -> Attendee:
    return attendee_factory(email="staff@example.com", role=Attendee.Role.STAFF)


@pytest.fixture
def other_staff(attendee_factory: AttendeeFactory) -> Attendee:
    return attendee_factory(email="staff2@example.com", role=Attendee.Role.STAFF)


@pytest.fixture
def organizer(attendee_factory: AttendeeFactory) -> Attendee:
    return attendee_factory(email="organizer@example.com", role=Attendee.Role.ORGANIZER)


@pytest.fixture
def next_week() -> datetime:
    same_time_next_week = timezone.now() + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )


@pytest.fixture
def free_activity(organizer: Attendee, next_week: datetime) -> Activity:
    return Activity.objects.create(
        title="Poetry Slam",
        category=Activity.Category.LITERARY,
        venue="Auditorium",
        starts_at=next_week,
        created_by=organizer,
    )


@pytest.fixture
def paid_activity(organizer: Attendee, next_week: datetime) -> Activity:
    return Activity.objects.create(
        title="Solo Singing",
        category=Activity.Category.CULTURAL,
        venue="Main Stage",
        starts_at=next_week,
        fee=Decimal("150.00"),
        created_by=organizer,
    )


@pytest.fixture
def team_activity(organizer: Attendee, next_week: datetime) -> Activity:
    """A paid team activity for teams of 2 to 5, leader included."""
    return Activity.objects.create(
        title="Hackathon",
        category=Activity.Category.TECHNICAL,
        venue="Lab 3",
        starts_at=next_week + timedelta(hours=2),
        shape=Activity.Shape.TEAM,
        min_team_size=2,
        max_team_size=5,
        fee=Decimal("300.00"),
        created_by=organizer,
    )


@pytest.fixture
def paid_registration_factory() -> t.Callable[[Activity, Attendee], Registration]:
    """Record a settled payment for an attendee, as the payment flow would."""

    def _create(activity: Activity, attendee: Attendee) -> Registration:
        registration = Registration.objects.create(
            activity=activity,
            attendee=attendee,
            payment_status=Registration.PaymentStatus.PAID,
            amount=activity.fee,
            finalized_at=timezone.now(),
        )
        activity.registrants.add(attendee)
        return registration

    return _create


def _client_for(user: Attendee) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def participant_client(participant: Attendee) -> Client:
    return _client_for(participant)


@pytest.fixture
def staff_client(staff: Attendee) -> Client:
    return _client_for(staff)


@pytest.fixture
def organizer_client(organizer: Attendee) -> Client:
    return _client_for(organizer)


@pytest.fixture
def client_for() -> t.Callable[[Attendee], Client]:
    """Build an authenticated client for any attendee."""
    return _client_for


@pytest.fixture
def run_concurrently() -> t.Callable[..., list[t.Any]]:
    """Run each call on its own thread and database connection, released together.

    Returns each call's result, or the exception it raised, in submission order.
    Only meaningful under ``django_db(transaction=True)`` so that every thread sees committed fixtures.
    """

    def _run(*calls: t.Callable[[], t.Any]) -> list[t.Any]:
        start = threading.Barrier(len(calls))

        def _worker(call: t.Callable[[], t.Any]) -> t.Any:
            try:
                start.wait()
                return call()
            except Exception as exc:
                return exc
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=len(calls)) as executor:
            futures = [executor.submit(_worker, call) for call in calls]
            return [future.result() for future in futures]

    return _run
