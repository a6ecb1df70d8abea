# timeslots.py
#
# Clock helpers shared by the store, the views and the reminder poll.
#
# Times are kept the way the admin form produces them: 24-hour "HH:MM"
# strings. Everything else (minutes of day, 12-hour labels) is derived.

from datetime import datetime
from typing import Optional

from config import DAYS, PALETTE

WEEKDAYS = DAYS + ["Sunday"]


def parse_time(t_str: str) -> int:
    """Converts '08:30' to minutes from midnight."""
    t = datetime.strptime(t_str.strip(), "%H:%M")
    return t.hour * 60 + t.minute


def to_12_hour(hhmm: str) -> str:
    """'13:05' -> '1:05 PM', '00:30' -> '12:30 AM'."""
    minutes = parse_time(hhmm)
    h, m = divmod(minutes, 60)
    suffix = "PM" if h >= 12 else "AM"
    h12 = h % 12 or 12
    return f"{h12}:{m:02d} {suffix}"


def format_label(start: str, end: str) -> str:
    return f"{to_12_hour(start)} - {to_12_hour(end)}"


def current_weekday_name(now: Optional[datetime] = None) -> str:
    """English weekday of the host's local time ('Sunday' included)."""
    # Python: Monday=0 .. Sunday=6, independent of the host locale
    return WEEKDAYS[(now or datetime.now()).weekday()]


def deterministic_color(subject: str) -> str:
    total = sum(ord(ch) for ch in subject)
    return PALETTE[total % len(PALETTE)]
