# models.py
"""
Core domain models for the College Timetable Manager.
These are used by:
- timetable store (persisted records)
- session builder (admin submissions)
- views (grids, faculty lists)
- reminder scheduler
- Streamlit UI
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from config import DAYS
from timeslots import format_label, parse_time


# ======================================================================
# Class Session
# ======================================================================

@dataclass
class ClassSession:
    """
    One scheduled class occurrence.

    department:    e.g. "CS"
    day:           "Monday" ... "Saturday"
    subject:       display name
    faculty:       display name (lookups ignore case)
    start / end:   "HH:MM" 24-hour strings
    start_minutes, end_minutes, time_label:
                   derived once from start/end
    """

    department: str
    day: str
    subject: str
    faculty: str
    start: str
    end: str
    start_minutes: int = field(init=False)
    end_minutes: int = field(init=False)
    time_label: str = field(init=False)

    def __post_init__(self):
        if self.day not in DAYS:
            raise ValueError(f"Invalid day for ClassSession: {self.day!r}")
        for name in ("department", "subject", "faculty"):
            if not getattr(self, name):
                raise ValueError(f"ClassSession.{name} must not be empty")
        self.start_minutes = parse_time(self.start)
        self.end_minutes = parse_time(self.end)
        if self.end_minutes <= self.start_minutes:
            raise ValueError(f"ClassSession ends before it starts: {self.start}-{self.end}")
        self.time_label = format_label(self.start, self.end)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "day": self.day,
            "subject": self.subject,
            "faculty": self.faculty,
            "start": self.start,
            "end": self.end,
            "startMinutes": self.start_minutes,
            "endMinutes": self.end_minutes,
            "timeLabel": self.time_label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassSession":
        # Derived fields are recomputed from start/end rather than trusted
        return cls(
            department=str(data["department"]),
            day=str(data["day"]),
            subject=str(data["subject"]),
            faculty=str(data["faculty"]),
            start=str(data["start"]),
            end=str(data["end"]),
        )


# ======================================================================
# Active Student
# ======================================================================

@dataclass
class ActiveStudent:
    """
    Last student to log in. Drives the reminder poll.
    Empty department means no reminders (idle).
    """

    name: str = ""
    department: str = ""

    @property
    def armed(self) -> bool:
        return bool(self.department)


# ======================================================================
# Reminder (emitted by the scheduler, shown by the UI)
# ======================================================================

@dataclass
class Reminder:
    key: str
    department: str
    subject: str
    faculty: str
    time_label: str

    @property
    def message(self) -> str:
        return f"Reminder: {self.subject} by {self.faculty} starts at {self.time_label}"
