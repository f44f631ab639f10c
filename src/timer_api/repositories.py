from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from threading import RLock
from typing import Optional

from .models import TimerEntity, utcnow
from .schemas import TimerCreate
from .settings import Settings

logger = logging.getLogger(__name__)


def new_timer_id() -> str:
    return uuid.uuid4().hex


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for timer storage backends."""

    name: str = "abstract"

    def open(self) -> None:
        """Acquire backend resources. Called once at application startup."""

    def close(self) -> None:
        """Release backend resources. Called once at application shutdown."""

    @abstractmethod
    def create(self, data: TimerCreate) -> TimerEntity:
        """Persist a new TimerEntity and return it with its assigned id and timestamps."""

    @abstractmethod
    def get(self, timer_id: str) -> Optional[TimerEntity]:
        """Return a TimerEntity by id, or None if not found. Never mutates stored state."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    name = "memory"

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[str, TimerEntity] = {}

    def close(self) -> None:
        with self._lock:
            self._items.clear()

    def create(self, data: TimerCreate) -> TimerEntity:
        now = utcnow()
        entity: TimerEntity = {
            "id": new_timer_id(),
            "title": data.title,
            "description": data.description,
            "date": data.date,
            "created_at": now,
            "updated_at": now,
        }
        with self._lock:
            self._items[entity["id"]] = entity
        logger.debug("Created timer %s", entity["id"])
        return entity.copy()  # type: ignore[return-value]

    def get(self, timer_id: str) -> Optional[TimerEntity]:
        with self._lock:
            item = self._items.get(timer_id)
            return None if item is None else item.copy()  # type: ignore[return-value]


# PUBLIC_INTERFACE
def get_repository(settings: Settings) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository backed by the standard library sqlite3 module
    """
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        return SQLiteRepository(settings.sqlite_db_path)
    return InMemoryRepository()
