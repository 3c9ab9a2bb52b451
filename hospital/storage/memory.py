"""In-memory storage backend.

Every entity lives in its own ``dict`` keyed by an auto-increment id.
Compound operations are serialised by a re-entrant lock; while the
outermost :meth:`MemStorage.atomic` block is open every write is
journaled so that an exception rolls the maps back to where they were.
"""
from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

from django.utils import timezone

from .base import ENTITY_MODELS, Record, Storage, clean, columns, duplicate, not_found, unique_columns

logger = logging.getLogger(__name__)


class MemStorage(Storage):
    name = 'memory'

    def __init__(self, seed: bool = False):
        self._tables: Dict[str, Dict[int, Record]] = {e: {} for e in ENTITY_MODELS}
        self._next_id: Dict[str, int] = {e: 1 for e in ENTITY_MODELS}
        self._lock = threading.RLock()
        self._depth = 0
        self._journal: Optional[List[Callable[[], None]]] = None
        if seed:
            from hospital.services.seed import seed_sample_data
            seed_sample_data(self)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    @contextmanager
    def atomic(self):
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._journal = []
            self._depth += 1
            try:
                yield self
            except BaseException:
                if outermost:
                    self._rollback()
                raise
            finally:
                self._depth -= 1
                if outermost:
                    self._journal = None

    def _rollback(self) -> None:
        undo = self._journal or []
        logger.debug('rolling back %d in-memory writes', len(undo))
        for op in reversed(undo):
            op()

    def _remember(self, op: Callable[[], None]) -> None:
        if self._journal is not None:
            self._journal.append(op)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def get(self, entity: str, pk: int, *, for_update: bool = False) -> Optional[Record]:
        try:
            pk = int(pk)
        except (TypeError, ValueError):
            return None
        record = self._tables[entity].get(pk)
        return dict(record) if record is not None else None

    def list(self, entity: str, **filters: Any) -> List[Record]:
        rows = self._tables[entity]
        out = []
        for pk in sorted(rows):
            row = rows[pk]
            if all(row.get(k) == v for k, v in filters.items()):
                out.append(dict(row))
        return out

    def count(self, entity: str, **filters: Any) -> int:
        if not filters:
            return len(self._tables[entity])
        return super().count(entity, **filters)

    def create(self, entity: str, data: Record) -> Record:
        values = clean(entity, data)
        with self._lock:
            self._check_unique(entity, values)
            table = self._tables[entity]
            pk = self._next_id[entity]
            record: Record = {}
            for name, field in columns(entity).items():
                if name == 'id':
                    record[name] = pk
                elif name in values:
                    record[name] = values[name]
                elif name == 'createdAt':
                    record[name] = timezone.now()
                else:
                    record[name] = field.get_default()
            table[pk] = record
            self._next_id[entity] = pk + 1

            def undo():
                table.pop(pk, None)
                self._next_id[entity] = pk
            self._remember(undo)
        return dict(record)

    def update(self, entity: str, pk: int, data: Record) -> Record:
        values = clean(entity, data)
        with self._lock:
            table = self._tables[entity]
            current = table.get(int(pk))
            if current is None:
                raise not_found(entity, pk)
            self._check_unique(entity, values, exclude=int(pk))
            before = copy.copy(current)
            current.update(values)

            def undo():
                table[int(pk)] = before
            self._remember(undo)
            return dict(current)

    def _check_unique(self, entity: str, values: Record, exclude: Optional[int] = None) -> None:
        for name in unique_columns(entity):
            value = values.get(name)
            if value is None:
                continue
            for pk, row in self._tables[entity].items():
                if pk != exclude and row.get(name) == value:
                    raise duplicate(entity, name, value)
