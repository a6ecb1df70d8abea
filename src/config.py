# config.py
import os
import logging

# --- WEEK DEFINITION ---

# Column order of every timetable grid
DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Subject colours (picked by character-code sum, see timeslots.deterministic_color)
PALETTE = [
    "#4a90e2", "#50e3c2", "#f5a623", "#9013fe", "#e94e77",
    "#7ed321", "#b8e986", "#f8e71c", "#bd10e0", "#ff7f50",
]

# --- ADMIN FORM ---

MAX_SUBJECTS = 20

# --- REMINDERS ---

REMINDER_LEAD_MINUTES = 5
REMINDER_DISPLAY_SECONDS = 10


def _poll_seconds() -> int:
    raw = os.getenv("TIMETABLE_POLL_SECONDS", "15")
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"TIMETABLE_POLL_SECONDS must be an integer, got {raw!r}")
    # A longer interval could step over the one trigger minute
    if not 1 <= value <= 60:
        raise ValueError(f"TIMETABLE_POLL_SECONDS must be between 1 and 60, got {value}")
    return value


POLL_INTERVAL_SECONDS = _poll_seconds()

# --- STORAGE ---

STORAGE_PATH = os.getenv("TIMETABLE_STORAGE_PATH", "timetable_storage.json")

TIMETABLE_KEY = "timetable"
ACTIVE_NAME_KEY = "activeStudentName"
ACTIVE_DEPARTMENT_KEY = "activeDepartment"

# --- LOGGING ---

LOG_LEVEL = os.getenv("TIMETABLE_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install the root handler once; later calls are no-ops."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
