# timetable.py
"""
The timetable store: every class session the admin has entered, in
insertion order, mirrored to storage after each change.
"""

import json
import logging
from typing import Iterable, Iterator, List

from config import TIMETABLE_KEY
from models import ClassSession
from storage import LocalStorage

logger = logging.getLogger(__name__)


def _decode(raw: str) -> List[ClassSession]:
    """Raises ValueError (or KeyError/TypeError) on anything malformed."""
    records = json.loads(raw)
    if not isinstance(records, list):
        raise ValueError("timetable is not a JSON array")
    return [ClassSession.from_dict(r) for r in records]


class TimetableStore:
    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._sessions: List[ClassSession] = []

    @classmethod
    def load(cls, storage: LocalStorage) -> "TimetableStore":
        store = cls(storage)
        raw = storage.get_item(TIMETABLE_KEY)
        if raw is None:
            return store
        try:
            store._sessions = _decode(raw)
        except (ValueError, KeyError, TypeError) as e:
            # Never block start-up on bad saved state
            logger.warning("Discarding malformed timetable in storage: %s", e)
            store._sessions = []
        else:
            logger.info("Loaded %d class sessions", len(store._sessions))
        return store

    def save(self) -> None:
        payload = json.dumps([s.as_dict() for s in self._sessions], ensure_ascii=False)
        self.storage.set_item(TIMETABLE_KEY, payload)

    # -----------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------

    def append(self, sessions: Iterable[ClassSession]) -> None:
        batch = list(sessions)
        if not batch:
            return
        self._sessions.extend(batch)
        self.save()
        logger.info("Appended %d session(s); store now holds %d", len(batch), len(self._sessions))

    def clear(self) -> None:
        self._sessions = []
        self.save()
        logger.info("Timetable cleared")

    # -----------------------------------------------------------
    # Queries
    # -----------------------------------------------------------

    def query_by_department(self, department: str) -> List[ClassSession]:
        return [s for s in self._sessions if s.department == department]

    def query_by_faculty(self, name: str) -> List[ClassSession]:
        wanted = name.lower()
        return [s for s in self._sessions if s.faculty.lower() == wanted]

    def all_departments(self) -> List[str]:
        return sorted({s.department for s in self._sessions})

    def __iter__(self) -> Iterator[ClassSession]:
        return iter(list(self._sessions))

    def __len__(self) -> int:
        return len(self._sessions)
