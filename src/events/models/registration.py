import typing as t
from decimal import Decimal

from django.conf import settings
from django.db import models

from common.models import TimeStampedModel

from .activity import Activity

if t.TYPE_CHECKING:
    from accounts.models import Attendee


class RegistrationQuerySet(models.QuerySet["Registration"]):
    def full(self) -> t.Self:
        """Select the activity and attendee and prefetch the roster for serialization."""
        return self.select_related("activity", "attendee").prefetch_related("team_members")


class RegistrationManager(models.Manager["Registration"]):
    def get_queryset(self) -> RegistrationQuerySet:
        """Get base queryset."""
        return RegistrationQuerySet(self.model, using=self._db)

    def full(self) -> RegistrationQuerySet:
        return self.get_queryset().full()


class Registration(TimeStampedModel):
    """The one record of an attendee taking part in an activity.

    When ``team_name`` is set the attendee leads a team and ``team_members`` is the
    authoritative roster for it. Payment status never regresses from ``paid``.
    """

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"
        FAILED = "failed", "Failed"

    activity = models.ForeignKey(Activity, on_delete=models.PROTECT, related_name="registrations")
    attendee = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="registrations")
    payment_status = models.CharField(
        max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    gateway_order_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    gateway_payment_id = models.CharField(max_length=255, blank=True, default="")
    finalized_at = models.DateTimeField(null=True, blank=True)
    team_name = models.CharField(max_length=255, blank=True, default="")

    objects = RegistrationManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["activity", "attendee"],
                name="unique_registration_per_activity_attendee",
            )
        ]

    def __str__(self) -> str:
        return f"{self.attendee_id} @ {self.activity_id} ({self.payment_status})"

    @property
    def is_paid(self) -> bool:
        return self.payment_status == self.PaymentStatus.PAID

    @property
    def is_team(self) -> bool:
        """Whether this registration leads a team."""
        return bool(self.team_name)

    @property
    def team_size(self) -> int:
        """Leader included; zero when this is not a team."""
        if not self.is_team:
            return 0
        return 1 + self.team_members.count()


class TeamMember(TimeStampedModel):
    """A snapshot of a team member taken when they joined.

    ``activity`` repeats the registration's activity so that the database can hold
    every member email unique per activity.
    """

    registration = models.ForeignKey(Registration, on_delete=models.CASCADE, related_name="team_members")
    activity = models.ForeignKey(Activity, on_delete=models.PROTECT, related_name="+")
    position = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=255)
    email = models.EmailField()
    phone_number = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        ordering = ["position", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["activity", "email"],
                name="unique_team_member_email_per_activity",
            )
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @classmethod
    def snapshot(cls, registration: Registration, attendee: "Attendee", position: int) -> "TeamMember":
        """Copy the attendee's current profile into an unsaved member row."""
        return cls(
            registration=registration,
            activity_id=registration.activity_id,
            position=position,
            name=attendee.display_name,
            email=attendee.email,
            phone_number=attendee.phone_number,
        )
