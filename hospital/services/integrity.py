from __future__ import annotations

from rest_framework.exceptions import ValidationError

from hospital.storage import Storage
from hospital.storage.base import ENTITY_LABELS, REFERENCES


def check_references(storage: Storage, entity: str, data: dict) -> None:
    """Raise a 400 naming every reference in *data* that points nowhere."""
    errors = {}
    for field, target in REFERENCES.get(entity, {}).items():
        value = data.get(field)
        if value is None:
            continue
        if storage.get(target, value) is None:
            errors[field] = [f'{ENTITY_LABELS[target]} with ID {value} does not exist']
    if errors:
        raise ValidationError(errors)
