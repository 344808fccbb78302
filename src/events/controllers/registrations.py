from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.authentication import AttendeeJWTAuth
from common.controllers import UserAwareController
from common.permissions import IsOrganizer
from common.throttling import WriteThrottle
from events import schema
from events.models import Registration
from events.service import registration_service


@api_controller("/activities", auth=AttendeeJWTAuth(), tags=["Registrations"])
class ActivityRegistrationController(UserAwareController):
    @route.post(
        "/{uuid:activity_id}/register",
        url_name="create_registration",
        response={201: schema.RegistrationSchema},
        throttle=WriteThrottle(),
    )
    def register(self, activity_id: UUID) -> tuple[int, Registration]:
        """Register for a free activity.

        The registration is immediately paid with amount 0. Registering twice returns 409.
        Paid activities return 412 and must go through the payment flow instead.
        """
        registration = registration_service.create_registration(activity_id, self.user())
        return status.HTTP_201_CREATED, Registration.objects.full().get(pk=registration.pk)

    @route.get(
        "/{uuid:activity_id}/registration",
        url_name="get_registration",
        response=schema.RegistrationViewSchema,
    )
    def get_registration(self, activity_id: UUID) -> registration_service.RegistrationView:
        """Your registration for one activity.

        If you are on someone else's team, their registration is returned with `as_team_member` set.
        """
        return registration_service.get_registration(activity_id, self.user())

    @route.get(
        "/{uuid:activity_id}/registrations",
        url_name="list_activity_registrations",
        response=PaginatedResponseSchema[schema.RegistrationSchema],
        permissions=[IsOrganizer],
    )
    @paginate(PageNumberPaginationExtra, page_size=50)
    def list_activity_registrations(self, activity_id: UUID) -> QuerySet[Registration]:
        """All registrations for an activity, newest first, with team rosters. Organizers only."""
        return registration_service.list_registrations_for_activity(activity_id)


@api_controller("/registrations", auth=AttendeeJWTAuth(), tags=["Registrations"])
class MyRegistrationsController(UserAwareController):
    @route.get("/mine", url_name="my_registrations", response=schema.MyRegistrationsSchema)
    def my_registrations(self) -> schema.MyRegistrationsSchema:
        """Every registration you hold, plus the teams you are a member of."""
        direct, team = registration_service.list_registrations_for_attendee(self.user())
        return schema.MyRegistrationsSchema(
            direct=[schema.RegistrationSchema.from_orm(r) for r in direct],
            team=[schema.RegistrationSchema.from_orm(r) for r in team],
        )
