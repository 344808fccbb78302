"""Activity catalog."""

from uuid import UUID

import structlog
from django.db.models import QuerySet

from accounts.models import Attendee
from common.store import translate_store_errors
from events.exceptions import ActivityUnavailableError
from events.models import Activity
from events.schema import ActivityCreateSchema, ActivityUpdateSchema
from events.service import update_db_instance

logger = structlog.get_logger(__name__)


@translate_store_errors
def create_activity(payload: ActivityCreateSchema, created_by: Attendee | None = None) -> Activity:
    activity = Activity.objects.create(**payload.model_dump(), created_by=created_by)
    logger.info("activity_created", activity_id=str(activity.id), title=activity.title, shape=activity.shape)
    return activity


@translate_store_errors
def update_activity(activity: Activity, payload: ActivityUpdateSchema) -> Activity:
    activity = update_db_instance(activity, payload)
    logger.info("activity_updated", activity_id=str(activity.id), fields=sorted(payload.model_fields_set))
    return activity


@translate_store_errors
def deactivate_activity(activity: Activity) -> Activity:
    """Close an activity to new registrations. Existing registrations are kept."""
    activity = update_db_instance(activity, is_active=False)
    logger.info("activity_deactivated", activity_id=str(activity.id))
    return activity


def list_activities(category: str | None = None) -> QuerySet[Activity]:
    """Active activities, soonest first."""
    return Activity.objects.active().by_category(category).order_by("starts_at")


@translate_store_errors
def get_activity(activity_id: UUID, *, active_only: bool = True) -> Activity:
    """Fetch an activity or raise ``ActivityUnavailableError``.

    Inactive activities count as missing unless ``active_only`` is False.
    """
    qs = Activity.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    if activity := qs.filter(pk=activity_id).first():
        return activity
    raise ActivityUnavailableError()
