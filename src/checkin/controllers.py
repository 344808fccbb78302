from uuid import UUID

from ninja_extra import api_controller, route

from accounts.service import account as account_service
from checkin import schema, service
from common.authentication import AttendeeJWTAuth
from common.controllers import UserAwareController
from common.permissions import IsOrganizer, IsStaffOrOrganizer
from common.throttling import ScanThrottle


@api_controller("/checkin", auth=AttendeeJWTAuth(), tags=["Check-in"], permissions=[IsStaffOrOrganizer])
class CheckinController(UserAwareController):
    @route.post("/verify", url_name="verify_entry", response=schema.EntryDecisionSchema, throttle=ScanThrottle())
    def verify_entry(self, payload: schema.VerifyEntrySchema) -> schema.EntryDecisionSchema:
        """Scan an attendee's credential at the gate.

        The first scan admits the attendee (`outcome: allowed`). Every later scan answers
        `outcome: denied`, with how many times the credential has been presented and when it
        was first admitted. Both outcomes return 200. Staff and organizers only.
        """
        decision = service.verify_entry(payload.attendee_id, self.user())
        return schema.EntryDecisionSchema(
            outcome=decision.outcome,
            attendee=schema.AttendeeSchema.from_orm(decision.attendee),
            scan_count=decision.scan_count,
            first_admitted_at=decision.first_admitted_at,
        )

    @route.get(
        "/attendees/{uuid:attendee_id}", url_name="attendee_credential", response=schema.AttendeeCredentialSchema
    )
    def attendee_credential(self, attendee_id: UUID) -> schema.AttendeeCredentialSchema:
        """Look up an attendee's admission state and full scan history."""
        attendee = account_service.get_attendee(attendee_id)
        return schema.AttendeeCredentialSchema(
            id=attendee.id,
            display_name=attendee.display_name,
            email=attendee.email,
            role=attendee.role,
            is_admitted=attendee.is_admitted,
            scan_count=attendee.scan_count,
            scan_history=[schema.ScanRecordSchema.from_orm(r) for r in service.scan_history(attendee)],
        )

    @route.get(
        "/stats", url_name="verification_stats", response=schema.VerificationStatsSchema, permissions=[IsOrganizer]
    )
    def stats(self) -> service.VerificationStats:
        """Participant admission totals. Organizers only."""
        return service.verification_stats()
