import datetime
import typing as t

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field

from accounts.models import ScanRecord
from accounts.schema import AttendeeSchema, MinimalAttendeeSchema


class VerifyEntrySchema(Schema):
    attendee_id: str = Field(..., min_length=1, max_length=64, description="The identifier encoded in the credential.")


class EntryDecisionSchema(Schema):
    outcome: t.Literal["allowed", "denied"]
    attendee: AttendeeSchema
    scan_count: int
    first_admitted_at: datetime.datetime | None = None


class ScanRecordSchema(ModelSchema):
    scanned_by: MinimalAttendeeSchema | None = None

    class Meta:
        model = ScanRecord
        fields = ["scanned_at", "result"]


class AttendeeCredentialSchema(Schema):
    id: UUID4
    display_name: str
    email: str
    role: str
    is_admitted: bool
    scan_count: int
    scan_history: list[ScanRecordSchema]


class VerificationStatsSchema(Schema):
    total: int
    admitted: int
    pending: int
    denied_scans: int
