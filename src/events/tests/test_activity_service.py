from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError
from pydantic import ValidationError

from accounts.models import Attendee
from events.exceptions import ActivityUnavailableError
from events.models import Activity
from events.schema import ActivityCreateSchema, ActivityUpdateSchema
from events.service import activity_service

pytestmark = pytest.mark.django_db


def test_create_activity(organizer: Attendee, next_week: datetime) -> None:
    payload = ActivityCreateSchema(
        title="  Code Relay ",
        category=Activity.Category.TECHNICAL,
        venue="Lab 1",
        starts_at=next_week,
        shape=Activity.Shape.TEAM,
        min_team_size=3,
        max_team_size=4,
        fee=Decimal("200"),
    )

    activity = activity_service.create_activity(payload, created_by=organizer)

    assert activity.title == "Code Relay"
    assert activity.is_team
    assert not activity.is_free
    assert activity.created_by == organizer
    assert activity.is_active


def test_create_schema_rejects_inverted_team_bounds(next_week: datetime) -> None:
    with pytest.raises(ValidationError, match="Minimum team size"):
        ActivityCreateSchema(
            title="Broken",
            category=Activity.Category.TECHNICAL,
            venue="Lab 1",
            starts_at=next_week,
            shape=Activity.Shape.TEAM,
            min_team_size=6,
            max_team_size=2,
        )


def test_update_activity(paid_activity: Activity, next_week: datetime) -> None:
    payload = ActivityUpdateSchema(venue="Open Air Theatre", starts_at=next_week + timedelta(days=1))

    activity = activity_service.update_activity(paid_activity, payload)

    assert activity.venue == "Open Air Theatre"
    assert activity.title == "Solo Singing"
    assert activity.fee == Decimal("150.00")


def test_update_cannot_invert_team_bounds(team_activity: Activity) -> None:
    """Bounds are checked against the stored value of the field that was not sent."""
    with pytest.raises(DjangoValidationError):
        activity_service.update_activity(team_activity, ActivityUpdateSchema(min_team_size=9))

    team_activity.refresh_from_db()
    assert team_activity.min_team_size == 2


def test_deactivate_hides_activity(free_activity: Activity) -> None:
    activity_service.deactivate_activity(free_activity)

    assert free_activity not in activity_service.list_activities()
    with pytest.raises(ActivityUnavailableError):
        activity_service.get_activity(free_activity.id)
    assert activity_service.get_activity(free_activity.id, active_only=False) == free_activity


def test_list_activities_by_category(
    free_activity: Activity, paid_activity: Activity, team_activity: Activity
) -> None:
    activities = list(activity_service.list_activities())
    assert set(activities) == {free_activity, paid_activity, team_activity}
    assert activities[-1] == team_activity
    assert list(activity_service.list_activities(Activity.Category.LITERARY)) == [free_activity]


def test_get_unknown_activity() -> None:
    with pytest.raises(ActivityUnavailableError, match="Event not found."):
        activity_service.get_activity("00000000-0000-4000-8000-000000000000")  # type: ignore[arg-type]
