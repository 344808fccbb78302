import typing as t
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MinValueValidator
from django.db import models

from common.models import TimeStampedModel

DEFAULT_MIN_TEAM_SIZE = 2
DEFAULT_MAX_TEAM_SIZE = 5


class ActivityQuerySet(models.QuerySet["Activity"]):
    def active(self) -> t.Self:
        """Only activities open for registration."""
        return self.filter(is_active=True)

    def by_category(self, category: str | None) -> t.Self:
        """Filter by category when one is given."""
        if category:
            return self.filter(category=category)
        return self


class ActivityManager(models.Manager["Activity"]):
    def get_queryset(self) -> ActivityQuerySet:
        """Get base queryset."""
        return ActivityQuerySet(self.model, using=self._db)

    def active(self) -> ActivityQuerySet:
        """Returns only active activities."""
        return self.get_queryset().active()


class Activity(TimeStampedModel):
    """Something an attendee can register for, alone or as a team.

    Team bounds count the leader and are only meaningful for team-shaped activities.
    """

    class Category(models.TextChoices):
        CULTURAL = "cultural", "Cultural"
        LITERARY = "literary", "Literary"
        TRENDING_EVENT = "trending_event", "Trending event"
        TECHNICAL = "technical", "Technical"

    class Shape(models.TextChoices):
        SOLO = "solo", "Solo"
        TEAM = "team", "Team"

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=20, choices=Category.choices, db_index=True)
    venue = models.CharField(max_length=255)
    starts_at = models.DateTimeField(db_index=True)
    rules = models.TextField(blank=True, default="")
    prizes = models.TextField(blank=True, default="")
    shape = models.CharField(max_length=10, choices=Shape.choices, default=Shape.SOLO)
    min_team_size = models.PositiveIntegerField(default=DEFAULT_MIN_TEAM_SIZE, validators=[MinValueValidator(1)])
    max_team_size = models.PositiveIntegerField(default=DEFAULT_MAX_TEAM_SIZE, validators=[MinValueValidator(1)])
    fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(Decimal("0"))]
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="created_activities"
    )
    registrants = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="registered_activities", blank=True)

    objects = ActivityManager()

    class Meta:
        ordering = ["starts_at"]
        verbose_name_plural = "activities"

    def __str__(self) -> str:
        return self.title

    def clean(self) -> None:
        """Team bounds must satisfy 1 <= min <= max."""
        super().clean()
        if self.is_team and self.min_team_size > self.max_team_size:
            raise DjangoValidationError(
                {"min_team_size": "Minimum team size cannot be greater than maximum team size."}
            )

    @property
    def is_free(self) -> bool:
        return self.fee == 0

    @property
    def is_team(self) -> bool:
        return self.shape == self.Shape.TEAM
