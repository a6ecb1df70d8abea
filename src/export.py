# export.py
"""Downloads offered next to a timetable: an .ics calendar and a CSV sheet."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pandas as pd
from ics import Calendar, Event

from config import DAYS
from builder import IMPORT_COLUMNS
from models import ClassSession


def create_ics_file(sessions: List[ClassSession], today: Optional[datetime] = None) -> str:
    c = Calendar()
    if not sessions:
        return c.serialize()

    today = today or datetime.now()
    days_ahead = 0 - today.weekday()
    if days_ahead <= 0:
        days_ahead += 7
    next_monday = (today + timedelta(days=days_ahead)).replace(hour=0, minute=0, second=0, microsecond=0)
    day_map = {d: next_monday + timedelta(days=i) for i, d in enumerate(DAYS)}

    for s in sessions:
        base = day_map.get(s.day)
        if not base:
            continue
        # Naive times are host-local; ics would read them as UTC
        e = Event(
            name=f"{s.subject} ({s.department})",
            begin=(base + timedelta(minutes=s.start_minutes)).astimezone(timezone.utc),
            end=(base + timedelta(minutes=s.end_minutes)).astimezone(timezone.utc),
        )
        e.description = f"Faculty: {s.faculty} | {s.time_label}"
        c.events.add(e)

    return c.serialize()


def sessions_to_csv(sessions: List[ClassSession]) -> str:
    """Same columns the bulk import reads, so the file can be re-imported."""
    df = pd.DataFrame([s.as_dict() for s in sessions], columns=IMPORT_COLUMNS)
    return df.to_csv(index=False)
