"""Relational storage backend on top of the Django ORM."""
from __future__ import annotations

from typing import Any, List, Optional

from django.db import IntegrityError, transaction

from hospital.exceptions import Conflict

from .base import Record, Storage, clean, columns, duplicate, model_for, not_found, unique_columns


class DatabaseStorage(Storage):
    """Maps records onto the models in :mod:`hospital.models`.

    ``for_update`` reads use ``SELECT ... FOR UPDATE`` and therefore only
    lock rows when called inside :meth:`atomic`.
    """

    name = 'database'

    def atomic(self):
        return transaction.atomic()

    def _record(self, entity: str, instance) -> Record:
        return {name: getattr(instance, field.attname) for name, field in columns(entity).items()}

    def _filters(self, entity: str, filters: dict[str, Any]) -> dict[str, Any]:
        cols = columns(entity)
        return {cols[k].attname: v for k, v in filters.items()}

    def get(self, entity: str, pk: int, *, for_update: bool = False) -> Optional[Record]:
        qs = model_for(entity).objects.all()
        if for_update:
            qs = qs.select_for_update()
        try:
            instance = qs.filter(pk=int(pk)).first()
        except (TypeError, ValueError):
            return None
        return self._record(entity, instance) if instance is not None else None

    def list(self, entity: str, **filters: Any) -> List[Record]:
        qs = model_for(entity).objects.filter(**self._filters(entity, filters)).order_by('id')
        return [self._record(entity, obj) for obj in qs]

    def count(self, entity: str, **filters: Any) -> int:
        return model_for(entity).objects.filter(**self._filters(entity, filters)).count()

    def create(self, entity: str, data: Record) -> Record:
        values = clean(entity, data)
        cols = columns(entity)
        model = model_for(entity)
        self._check_unique(entity, values)
        try:
            with transaction.atomic():
                instance = model.objects.create(**{cols[k].attname: v for k, v in values.items()})
        except IntegrityError as exc:
            raise Conflict(f'{entity} could not be saved: {exc}') from exc
        return self._record(entity, instance)

    def update(self, entity: str, pk: int, data: Record) -> Record:
        values = clean(entity, data)
        cols = columns(entity)
        instance = model_for(entity).objects.filter(pk=pk).first()
        if instance is None:
            raise not_found(entity, pk)
        self._check_unique(entity, values, exclude=instance.pk)
        for key, value in values.items():
            setattr(instance, cols[key].attname, value)
        if values:
            instance.save(update_fields=[cols[k].name for k in values])
        return self._record(entity, instance)

    def _check_unique(self, entity: str, values: Record, exclude: Optional[int] = None) -> None:
        cols = columns(entity)
        model = model_for(entity)
        for name in unique_columns(entity):
            value = values.get(name)
            if value is None:
                continue
            qs = model.objects.filter(**{cols[name].attname: value})
            if exclude is not None:
                qs = qs.exclude(pk=exclude)
            if qs.exists():
                raise duplicate(entity, name, value)
