from uuid import UUID

from ninja_extra import api_controller, route, status

from accounts.models import Attendee
from accounts.schema import MinimalAttendeeSchema
from common.authentication import AttendeeJWTAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import schema
from events.models import Registration
from events.service import activity_service
from events.service.team_service import TeamFormationService


@api_controller("/activities", auth=AttendeeJWTAuth(), tags=["Teams"], throttle=WriteThrottle())
class TeamController(UserAwareController):
    def get_team_service(self, activity_id: UUID) -> TeamFormationService:
        """The team service for this activity, acting as the requesting attendee."""
        return TeamFormationService(activity=activity_service.get_activity(activity_id), leader=self.user())

    @route.post("/{uuid:activity_id}/team", url_name="create_team", response={201: schema.RegistrationSchema})
    def create_team(self, activity_id: UUID, payload: schema.TeamCreateSchema) -> tuple[int, Registration]:
        """Form a team and become its leader.

        You must have a paid registration for the activity. Every listed member must be a registered
        attendee with their own paid registration who is neither leading nor on another team. The first
        member that fails a check is named in the error and nothing is saved.
        """
        service = self.get_team_service(activity_id)
        registration = service.create_team(payload.team_name, payload.member_emails)
        return status.HTTP_201_CREATED, Registration.objects.full().get(pk=registration.pk)

    @route.post(
        "/{uuid:activity_id}/team/members", url_name="add_team_member", response=schema.RegistrationSchema
    )
    def add_member(self, activity_id: UUID, payload: schema.TeamMemberAddSchema) -> Registration:
        """Add one more member to your team, subject to the same checks as team creation."""
        registration = self.get_team_service(activity_id).add_member(payload.email)
        return Registration.objects.full().get(pk=registration.pk)

    @route.get(
        "/{uuid:activity_id}/team/candidates",
        url_name="check_team_candidate",
        response=MinimalAttendeeSchema,
    )
    def check_candidate(self, activity_id: UUID, email: str) -> Attendee:
        """Check whether an attendee could join your team right now.

        Returns the attendee when every membership check passes, otherwise the error that team
        creation would return for them.
        """
        return self.get_team_service(activity_id).check_candidate(email)

    @route.delete(
        "/{uuid:activity_id}/team/members/{email}",
        url_name="remove_team_member",
        response=schema.RegistrationSchema,
    )
    def remove_member(self, activity_id: UUID, email: str) -> Registration:
        """Remove a member from your team."""
        registration = self.get_team_service(activity_id).remove_member(email)
        return Registration.objects.full().get(pk=registration.pk)
