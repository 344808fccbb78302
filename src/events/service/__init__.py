import typing as t

from django.db import models, transaction
from pydantic import BaseModel

T = t.TypeVar("T", bound=models.Model)


@transaction.atomic
def update_db_instance(instance: T, payload: BaseModel | None = None, **fields: t.Any) -> T:
    """Apply the fields set on ``payload`` (and any extra ``fields``) to a locked copy of ``instance``.

    Only the touched columns are written, so concurrent edits of other fields are not clobbered.
    Model validation still runs on the whole row.
    """
    locked = type(instance)._default_manager.select_for_update().get(pk=instance.pk)
    changes = payload.model_dump(exclude_unset=True) if payload is not None else {}
    changes.update(fields)
    if not changes:
        return locked
    for name, value in changes.items():
        setattr(locked, name, value)
    update_fields = [*changes]
    if any(f.name == "updated_at" for f in locked._meta.concrete_fields):
        update_fields.append("updated_at")
    locked.save(update_fields=update_fields)
    return locked
