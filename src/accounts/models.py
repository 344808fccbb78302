import re
import typing as t
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone

from accounts.validators import normalize_phone_number, validate_phone_number


class AttendeeQueryset(models.QuerySet["Attendee"]):
    """Queryset for Attendee."""

    def by_email(self, email: str) -> t.Self:
        """Case-insensitive email lookup."""
        return self.filter(email__iexact=normalize_email(email))


class AttendeeManager(UserManager["Attendee"]):
    def get_queryset(self) -> AttendeeQueryset:
        """Get queryset for Attendee."""
        return AttendeeQueryset(self.model, using=self._db)

    def by_email(self, email: str) -> AttendeeQueryset:
        """Case-insensitive email lookup."""
        return self.get_queryset().by_email(email)


def normalize_email(email: str) -> str:
    """Emails compare case-insensitively; store and compare them lowercase."""
    return email.strip().lower()


class Attendee(AbstractUser):
    """Any registered identity: participant, staff or organizer.

    ``is_admitted``, ``scan_count`` and the scan history are written only by the
    entry gate. ``is_admitted`` flips false -> true exactly once.
    """

    class Role(models.TextChoices):
        PARTICIPANT = "participant", "Participant"
        STAFF = "staff", "Staff"
        ORGANIZER = "organizer", "Organizer"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone_number = models.CharField(
        max_length=20, blank=True, default="", validators=[validate_phone_number], help_text="Contact number"
    )
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.PARTICIPANT, db_index=True)
    is_admitted = models.BooleanField(default=False, db_index=True)
    scan_count = models.PositiveIntegerField(default=0)

    objects = AttendeeManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                name="unique_attendee_email_case_insensitive",
            )
        ]

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Normalize email and phone number before saving."""
        if self.email:
            self.email = normalize_email(self.email)
        if self.phone_number:
            self.phone_number = normalize_phone_number(self.phone_number)
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        """Full name, or the local part of the username as a fallback."""
        return self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()


class ScanRecord(models.Model):
    """One entry in an attendee's scan audit trail."""

    class Result(models.TextChoices):
        ALLOWED = "allowed", "Allowed"
        DENIED = "denied", "Denied"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attendee = models.ForeignKey(Attendee, on_delete=models.CASCADE, related_name="scan_history")
    scanned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    scanned_at = models.DateTimeField(default=timezone.now, db_index=True)
    result = models.CharField(max_length=10, choices=Result.choices, db_index=True)

    class Meta:
        ordering = ["scanned_at"]
        indexes = [
            models.Index(fields=["attendee", "result"], name="ix_scanrecord_attendee_result"),
        ]

    def __str__(self) -> str:
        return f"{self.result} scan of {self.attendee_id} at {self.scanned_at:%Y-%m-%d %H:%M:%S}"
