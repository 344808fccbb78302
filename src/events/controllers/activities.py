from uuid import UUID

from django.db.models import QuerySet
from ninja import Query
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.authentication import AttendeeJWTAuth
from common.controllers import UserAwareController
from common.permissions import IsOrganizer
from common.throttling import WriteThrottle
from events import schema
from events.models import Activity
from events.service import activity_service


@api_controller("/activities", tags=["Activities"])
class ActivityController(UserAwareController):
    @route.get("/", url_name="list_activities", response=PaginatedResponseSchema[schema.ActivitySchema])
    @paginate(PageNumberPaginationExtra, page_size=50)
    def list_activities(
        self,
        params: schema.ActivityFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> QuerySet[Activity]:
        """Browse the activities open for registration, soonest first.

        Filter by `category` to show a single track.
        """
        return activity_service.list_activities(params.category)

    @route.get("/{uuid:activity_id}", url_name="get_activity", response=schema.ActivitySchema)
    def get_activity(self, activity_id: UUID) -> Activity:
        """Retrieve one active activity with its team bounds and fee."""
        return activity_service.get_activity(activity_id)

    @route.post(
        "/",
        url_name="create_activity",
        response={201: schema.ActivitySchema},
        auth=AttendeeJWTAuth(),
        permissions=[IsOrganizer],
        throttle=WriteThrottle(),
    )
    def create_activity(self, payload: schema.ActivityCreateSchema) -> tuple[int, Activity]:
        """Add an activity to the catalog. Organizers only."""
        return status.HTTP_201_CREATED, activity_service.create_activity(payload, created_by=self.user())

    @route.put(
        "/{uuid:activity_id}",
        url_name="update_activity",
        response=schema.ActivitySchema,
        auth=AttendeeJWTAuth(),
        permissions=[IsOrganizer],
        throttle=WriteThrottle(),
    )
    def update_activity(self, activity_id: UUID, payload: schema.ActivityUpdateSchema) -> Activity:
        """Edit an activity. Only the fields sent are changed; inactive activities can be reactivated here."""
        activity = activity_service.get_activity(activity_id, active_only=False)
        return activity_service.update_activity(activity, payload)

    @route.delete(
        "/{uuid:activity_id}",
        url_name="deactivate_activity",
        response={204: None},
        auth=AttendeeJWTAuth(),
        permissions=[IsOrganizer],
    )
    def deactivate_activity(self, activity_id: UUID) -> tuple[int, None]:
        """Close an activity. Registrations are kept; the activity just stops accepting new ones."""
        activity = activity_service.get_activity(activity_id, active_only=False)
        activity_service.deactivate_activity(activity)
        return status.HTTP_204_NO_CONTENT, None
