# reminders.py
"""
Reminder poll: "class starts in 5 minutes" notices for the active
student's department.

The UI calls poll() on a fixed interval (config.POLL_INTERVAL_SECONDS).
A reminder fires when the current minute equals a session's start minute
minus the lead time. Exact-minute matching means a minute the host never
polls (sleep, suspended tab) is a missed reminder; the interval is kept
well under a minute so normal running never skips one.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Set

from config import REMINDER_LEAD_MINUTES
from models import ActiveStudent, ClassSession, Reminder
from timetable import TimetableStore
from timeslots import current_weekday_name

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def reminder_key(session: ClassSession, date_str: str) -> str:
    return "|".join([
        date_str,
        session.department,
        session.day,
        session.subject,
        session.faculty,
        str(session.start_minutes),
    ])


class TriggeredKeys:
    """Keys already fired today. Cleared the first time a new date is seen."""

    def __init__(self):
        self.date: Optional[str] = None
        self._keys: Set[str] = set()

    def roll_to(self, date_str: str) -> None:
        if date_str != self.date:
            if self._keys:
                logger.debug("New day %s, forgetting %d reminder key(s)", date_str, len(self._keys))
            self._keys.clear()
            self.date = date_str

    def add(self, key: str) -> bool:
        """True if the key was new."""
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)


class ReminderScheduler:
    def __init__(
        self,
        store: TimetableStore,
        student: ActiveStudent,
        clock: Clock = datetime.now,
        lead_minutes: int = REMINDER_LEAD_MINUTES,
    ):
        self.store = store
        self.student = student
        self.clock = clock
        self.lead_minutes = lead_minutes
        self.triggered = TriggeredKeys()

    @property
    def armed(self) -> bool:
        return self.student.armed

    def due_sessions(self, now: datetime) -> List[ClassSession]:
        weekday = current_weekday_name(now)
        now_minutes = now.hour * 60 + now.minute
        todays = [
            s for s in self.store.query_by_department(self.student.department)
            if s.day == weekday
        ]
        todays.sort(key=lambda s: s.start_minutes)
        return [s for s in todays if now_minutes == s.start_minutes - self.lead_minutes]

    def poll(self) -> List[Reminder]:
        """One tick. Returns the reminders that became due, each at most once per day."""
        if not self.armed:
            return []

        now = self.clock()
        today = now.date().isoformat()
        self.triggered.roll_to(today)

        fired: List[Reminder] = []
        for s in self.due_sessions(now):
            key = reminder_key(s, today)
            if not self.triggered.add(key):
                continue
            r = Reminder(
                key=key,
                department=s.department,
                subject=s.subject,
                faculty=s.faculty,
                time_label=s.time_label,
            )
            logger.info("Reminder fired: %s", r.message)
            fired.append(r)
        return fired
