"""Team formation on top of the registration ledger.

Every email may be bound to at most one team per activity, as leader or member.
Mutations of one team are serialized by locking the leader's registration row;
member rows carry a per-activity unique email so a lost race between two leaders
fails cleanly instead of binding someone twice.
"""

import typing as t

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Max

from accounts.exceptions import UnknownAttendeeError
from accounts.models import Attendee, normalize_email
from common.store import translate_store_errors
from events.exceptions import (
    ActivityUnavailableError,
    AlreadyInOtherTeamError,
    AlreadyLeaderError,
    DuplicateInRequestError,
    LeaderNotPaidError,
    NoTeamYetError,
    NotAMemberError,
    NotATeamActivityError,
    NotRegisteredError,
    PaymentIncompleteError,
    SelfReferenceError,
    TeamAlreadyExistsError,
    TeamFullError,
    TeamTooLargeError,
    TeamTooSmallError,
)
from events.models import Activity, Registration, TeamMember

logger = structlog.get_logger(__name__)


class TeamFormationService:
    def __init__(self, *, activity: Activity, leader: Attendee) -> None:
        """Bind the service to one activity and its acting leader."""
        if not activity.is_active:
            raise ActivityUnavailableError()
        if not activity.is_team:
            raise NotATeamActivityError()
        self.activity = activity
        self.leader = leader

    @translate_store_errors
    @transaction.atomic
    def create_team(self, team_name: str, member_emails: t.Sequence[str]) -> Registration:
        """Form a team led by ``self.leader``.

        Either every member passes admission and the whole roster is written, or
        nothing changes.
        """
        team_name = team_name.strip()
        if not team_name:
            raise DjangoValidationError({"team_name": "Team name is required."})

        registration = self._lock_leader_registration()
        if registration is None or not registration.is_paid:
            raise LeaderNotPaidError()
        if registration.is_team:
            raise TeamAlreadyExistsError()
        if self._in_other_team(self.leader.email, registration):
            raise AlreadyInOtherTeamError(email=self.leader.email)

        seen: set[str] = set()
        members = [self._admit(email, seen, registration) for email in member_emails]

        size = 1 + len(members)
        if size < self.activity.min_team_size:
            raise TeamTooSmallError(min_size=self.activity.min_team_size, size=size)
        if size > self.activity.max_team_size:
            raise TeamTooLargeError(max_size=self.activity.max_team_size, size=size)

        registration.team_name = team_name
        registration.save(update_fields=["team_name", "updated_at"])
        self._bind(registration, members, first_position=0)

        logger.info(
            "team_created",
            activity_id=str(self.activity.id),
            leader_id=str(self.leader.id),
            team_name=team_name,
            size=size,
        )
        return registration

    @translate_store_errors
    @transaction.atomic
    def add_member(self, email: str) -> Registration:
        registration = self._lock_leader_registration()
        if registration is None or not registration.is_team:
            raise NoTeamYetError()

        current = list(registration.team_members.values_list("email", flat=True))
        if 1 + len(current) + 1 > self.activity.max_team_size:
            raise TeamFullError(max_size=self.activity.max_team_size)

        member = self._admit(email, set(current), registration)
        next_position = (registration.team_members.aggregate(last=Max("position"))["last"] or 0) + 1
        self._bind(registration, [member], first_position=next_position)

        logger.info(
            "team_member_added",
            activity_id=str(self.activity.id),
            leader_id=str(self.leader.id),
            member_email=member.email,
        )
        return registration

    @translate_store_errors
    @transaction.atomic
    def check_candidate(self, email: str) -> Attendee:
        """Run the member admission checks for one email without changing anything.

        Lets a paid leader vet someone before forming the team or adding them to it.
        """
        registration = self._lock_leader_registration()
        if registration is None or not registration.is_paid:
            raise LeaderNotPaidError()
        current = set(registration.team_members.values_list("email", flat=True))
        return self._admit(email, current, registration)

    @translate_store_errors
    @transaction.atomic
    def remove_member(self, email: str) -> Registration:
        """Drop a member from the roster.

        The minimum team size is only enforced when the team is formed, so a team
        may shrink below it here.
        """
        registration = self._lock_leader_registration()
        if registration is None or not registration.is_team:
            raise NoTeamYetError()

        email = normalize_email(email)
        deleted, _ = registration.team_members.filter(email=email).delete()
        if not deleted:
            raise NotAMemberError(email=email)

        logger.info(
            "team_member_removed",
            activity_id=str(self.activity.id),
            leader_id=str(self.leader.id),
            member_email=email,
        )
        return registration

    def _lock_leader_registration(self) -> Registration | None:
        return Registration.objects.select_for_update().filter(activity=self.activity, attendee=self.leader).first()

    def _in_other_team(self, email: str, registration: Registration) -> bool:
        return (
            TeamMember.objects.filter(activity=self.activity, email=email).exclude(registration=registration).exists()
        )

    def _admit(self, email: str, seen: set[str], registration: Registration) -> Attendee:
        """Run the member admission checks in their fixed order and return the candidate.

        The candidate's own registration is locked so that they cannot become a
        leader while being added here.
        """
        email = normalize_email(email)
        if email == self.leader.email:
            raise SelfReferenceError()
        if email in seen:
            raise DuplicateInRequestError(email=email)
        seen.add(email)

        candidate = Attendee.objects.by_email(email).first()
        if candidate is None:
            raise UnknownAttendeeError(identifier=email)

        candidate_registration = (
            Registration.objects.select_for_update().filter(activity=self.activity, attendee=candidate).first()
        )
        if candidate_registration is None:
            raise NotRegisteredError(email=email)
        if not candidate_registration.is_paid:
            raise PaymentIncompleteError(email=email)
        if candidate_registration.is_team:
            raise AlreadyLeaderError(email=email)
        if self._in_other_team(email, registration):
            raise AlreadyInOtherTeamError(email=email)
        return candidate

    def _bind(self, registration: Registration, members: list[Attendee], first_position: int) -> None:
        rows = [
            TeamMember.snapshot(registration, member, position)
            for position, member in enumerate(members, start=first_position)
        ]
        try:
            with transaction.atomic():
                TeamMember.objects.bulk_create(rows)
        except IntegrityError:
            emails = [row.email for row in rows]
            taken = (
                TeamMember.objects.filter(activity=self.activity, email__in=emails)
                .exclude(registration=registration)
                .values_list("email", flat=True)
                .first()
            )
            logger.warning(
                "team_member_bind_conflict", activity_id=str(self.activity.id), leader_id=str(self.leader.id)
            )
            raise AlreadyInOtherTeamError(email=taken or emails[0])
