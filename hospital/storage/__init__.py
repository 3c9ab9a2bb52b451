"""
Storage backends.

Services never instantiate a backend directly; they call
:func:`get_storage`, which builds the backend named by the
``SIMRS_STORAGE_BACKEND`` setting once per process.  Tests swap the
backend with :func:`set_storage`.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from django.conf import settings

from .base import Record, Storage
from .database import DatabaseStorage
from .memory import MemStorage

logger = logging.getLogger(__name__)

_storage: Optional[Storage] = None
_lock = threading.Lock()


def build_storage(backend: Optional[str] = None) -> Storage:
    backend = backend or getattr(settings, 'SIMRS_STORAGE_BACKEND', 'database')
    if backend == 'database':
        return DatabaseStorage()
    if backend == 'memory':
        return MemStorage(seed=getattr(settings, 'SIMRS_MEMORY_SEED', True))
    raise ValueError(f'unknown storage backend {backend!r}')


def get_storage() -> Storage:
    global _storage
    if _storage is None:
        with _lock:
            if _storage is None:
                _storage = build_storage()
                logger.info('using %s storage backend', _storage.name)
    return _storage


def set_storage(storage: Optional[Storage]) -> None:
    """Install *storage* as the process-wide backend (``None`` resets)."""
    global _storage
    with _lock:
        _storage = storage


__all__ = ['Record', 'Storage', 'DatabaseStorage', 'MemStorage', 'build_storage', 'get_storage', 'set_storage']
