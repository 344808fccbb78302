"""Activity catalog schemas."""

import typing as t
from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, AwareDatetime, Field, model_validator

from common.schema import OneToOneFiftyString, StrippedString
from events.models import DEFAULT_MAX_TEAM_SIZE, DEFAULT_MIN_TEAM_SIZE, Activity


class MinimalActivitySchema(ModelSchema):
    id: UUID4

    class Meta:
        model = Activity
        fields = ["id", "title", "category", "shape", "starts_at"]


class ActivitySchema(ModelSchema):
    id: UUID4
    category: Activity.Category
    shape: Activity.Shape
    fee: Decimal
    is_free: bool
    is_team: bool

    class Meta:
        model = Activity
        fields = [
            "id",
            "title",
            "description",
            "category",
            "venue",
            "starts_at",
            "rules",
            "prizes",
            "shape",
            "min_team_size",
            "max_team_size",
            "fee",
            "is_active",
        ]


class _TeamBoundsMixin(Schema):
    @model_validator(mode="after")
    def validate_team_bounds(self) -> t.Self:
        """Minimum team size cannot exceed the maximum."""
        min_size = getattr(self, "min_team_size", None)
        max_size = getattr(self, "max_team_size", None)
        if min_size is not None and max_size is not None and min_size > max_size:
            raise ValueError("Minimum team size cannot be greater than maximum team size.")
        return self


class ActivityCreateSchema(_TeamBoundsMixin):
    title: OneToOneFiftyString
    description: StrippedString = ""
    category: Activity.Category
    venue: OneToOneFiftyString
    starts_at: AwareDatetime
    rules: StrippedString = ""
    prizes: StrippedString = ""
    shape: Activity.Shape = Activity.Shape.SOLO
    min_team_size: int = Field(DEFAULT_MIN_TEAM_SIZE, ge=1)
    max_team_size: int = Field(DEFAULT_MAX_TEAM_SIZE, ge=1)
    fee: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)


class ActivityUpdateSchema(_TeamBoundsMixin):
    """Partial update; unset fields are left alone."""

    title: OneToOneFiftyString | None = None
    description: StrippedString | None = None
    category: Activity.Category | None = None
    venue: OneToOneFiftyString | None = None
    starts_at: AwareDatetime | None = None
    rules: StrippedString | None = None
    prizes: StrippedString | None = None
    shape: Activity.Shape | None = None
    min_team_size: int | None = Field(None, ge=1)
    max_team_size: int | None = Field(None, ge=1)
    fee: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: bool | None = None


class ActivityFilterSchema(Schema):
    category: Activity.Category | None = None
