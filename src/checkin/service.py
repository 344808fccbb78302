"""Entry verification gate.

Each attendee is admitted at most once, whatever they registered for. The first
scan flips ``is_admitted`` with a conditional update; every later scan is
denied and only grows the audit trail.
"""

import typing as t
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import Count, F, Q
from django.utils import timezone

from accounts.exceptions import UnknownAttendeeError
from accounts.models import Attendee, ScanRecord
from common.store import translate_store_errors

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EntryDecision:
    outcome: ScanRecord.Result
    attendee: Attendee
    scan_count: int
    first_admitted_at: datetime | None

    @property
    def allowed(self) -> bool:
        return self.outcome == ScanRecord.Result.ALLOWED


class VerificationStats(t.TypedDict):
    total: int
    admitted: int
    pending: int
    denied_scans: int


def _parse_attendee_id(attendee_id: UUID | str) -> UUID:
    if isinstance(attendee_id, UUID):
        return attendee_id
    try:
        return UUID(str(attendee_id).strip())
    except ValueError:
        raise UnknownAttendeeError(identifier=attendee_id)


@translate_store_errors
@transaction.atomic
def verify_entry(attendee_id: UUID | str, scanner: Attendee | None) -> EntryDecision:
    """Admit the attendee on their first scan, deny them on every later one.

    Any identifier string is accepted; decoding a credential into it is up to the caller.
    """
    pk = _parse_attendee_id(attendee_id)
    scanned_at = timezone.now()

    admitted = Attendee.objects.filter(pk=pk, is_admitted=False).update(is_admitted=True, scan_count=1)
    if admitted:
        outcome = ScanRecord.Result.ALLOWED
    elif Attendee.objects.filter(pk=pk).update(scan_count=F("scan_count") + 1):
        outcome = ScanRecord.Result.DENIED
    else:
        raise UnknownAttendeeError(identifier=attendee_id)

    ScanRecord.objects.create(attendee_id=pk, scanned_by=scanner, scanned_at=scanned_at, result=outcome)
    attendee = Attendee.objects.get(pk=pk)
    first_admitted_at = (
        ScanRecord.objects.filter(attendee_id=pk, result=ScanRecord.Result.ALLOWED)
        .order_by("scanned_at")
        .values_list("scanned_at", flat=True)
        .first()
    )

    if outcome == ScanRecord.Result.ALLOWED:
        log, event = logger.info, "entry_allowed"
    else:
        log, event = logger.warning, "entry_denied"
    log(
        event,
        attendee_id=str(pk),
        scanner_id=str(scanner.pk) if scanner else None,
        scan_count=attendee.scan_count,
    )
    return EntryDecision(
        outcome=outcome,
        attendee=attendee,
        scan_count=attendee.scan_count,
        first_admitted_at=first_admitted_at,
    )


@translate_store_errors
def verification_stats() -> VerificationStats:
    """Participant admission totals and how many entries were turned away."""
    counts = Attendee.objects.filter(role=Attendee.Role.PARTICIPANT).aggregate(
        total=Count("pk"), admitted=Count("pk", filter=Q(is_admitted=True))
    )
    denied_scans = ScanRecord.objects.filter(
        result=ScanRecord.Result.DENIED, attendee__role=Attendee.Role.PARTICIPANT
    ).count()
    return VerificationStats(
        total=counts["total"],
        admitted=counts["admitted"],
        pending=counts["total"] - counts["admitted"],
        denied_scans=denied_scans,
    )


@translate_store_errors
def scan_history(attendee: Attendee) -> list[ScanRecord]:
    return list(attendee.scan_history.select_related("scanned_by").order_by("scanned_at"))
