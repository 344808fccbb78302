import typing as t
import uuid

from django.db import models


class TimeStampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override the save method to call full_clean before saving.

        Uniqueness is left to the database constraints so that concurrent writers
        race on the constraint instead of on a prior read.
        """
        self.full_clean(validate_unique=False, validate_constraints=False)
        super().save(*args, **kwargs)
