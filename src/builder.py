# builder.py
"""
Turns admin input into ClassSession records.

Two entry points:
- build_sessions(): one form submission (a department, a day, N subjects)
- sessions_from_dataframe(): an uploaded CSV/Excel sheet, one row per session

Both validate the whole batch before anything is created, so a submission
is either stored completely or not at all.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd

from config import DAYS, MAX_SUBJECTS
from models import ClassSession
from timeslots import parse_time
from timetable import TimetableStore

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = ["department", "day", "subject", "faculty", "start", "end"]


class ValidationError(ValueError):
    """Input the user has to correct. str(e) is safe to show as-is."""


@dataclass
class SubjectEntry:
    subject: str = ""
    faculty: str = ""
    start: str = ""
    end: str = ""


def clamp_subject_count(n) -> int:
    try:
        n = int(n or 0)
    except (TypeError, ValueError):
        n = 0
    return max(0, min(MAX_SUBJECTS, n))


def _minutes(hhmm: str, label: str) -> int:
    try:
        return parse_time(hhmm)
    except ValueError:
        raise ValidationError(f"Invalid time {hhmm!r} for {label}. Use HH:MM.")


# -----------------------------------------------------------
# Form submission
# -----------------------------------------------------------

def build_sessions(department: str, day: str, entries: Sequence[SubjectEntry]) -> List[ClassSession]:
    department = (department or "").strip()
    day = (day or "").strip()

    if not department or not day:
        raise ValidationError("Please select department and day.")
    if day not in DAYS:
        raise ValidationError(f"Unknown day {day!r}. Choose one of {', '.join(DAYS)}.")
    if not entries:
        raise ValidationError("Please enter at least one subject.")

    cleaned = [
        SubjectEntry(
            subject=(e.subject or "").strip(),
            faculty=(e.faculty or "").strip(),
            start=(e.start or "").strip(),
            end=(e.end or "").strip(),
        )
        for e in entries
    ]

    for e in cleaned:
        if not (e.subject and e.faculty and e.start and e.end):
            raise ValidationError("Please fill subject, faculty, start and end time for each entry.")

    for i, e in enumerate(cleaned, start=1):
        label = f"subject {i}"
        if _minutes(e.end, label) <= _minutes(e.start, label):
            raise ValidationError(f"End time must be after start time for subject {i}.")

    return [
        ClassSession(
            department=department,
            day=day,
            subject=e.subject,
            faculty=e.faculty,
            start=e.start,
            end=e.end,
        )
        for e in cleaned
    ]


def submit(store: TimetableStore, department: str, day: str, entries: Sequence[SubjectEntry]) -> List[ClassSession]:
    """Validate, then append as one batch. Raises ValidationError untouched."""
    sessions = build_sessions(department, day, entries)
    store.append(sessions)
    logger.info("Admin added %d session(s) for %s on %s", len(sessions), sessions[0].department, sessions[0].day)
    return sessions


# -----------------------------------------------------------
# Bulk import (CSV / Excel)
# -----------------------------------------------------------

def clean_header(col_name: str) -> str:
    return str(col_name).strip().lower().replace(" ", "_").replace("/", "_").replace(".", "")


def normalize_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [clean_header(c) for c in df.columns]
    # "Start Time" / "End Time" headers are common in exported sheets
    df = df.rename(columns={"start_time": "start", "end_time": "end", "dept": "department"})
    dupes = sorted(set(df.columns[df.columns.duplicated()]))
    if dupes:
        raise ValidationError(f"Duplicate column(s): {', '.join(dupes)}.")
    return df


def _hhmm(value: str) -> str:
    # "09:00:00" -> "09:00"
    return ":".join(value.split(":")[:2])


def _cell(row: pd.Series, col: str) -> str:
    val = row.get(col, "")
    if pd.isna(val):
        return ""
    # Excel hands back datetime.time for time-formatted cells
    if hasattr(val, "strftime"):
        return val.strftime("%H:%M")
    return str(val).strip()


def sessions_from_dataframe(df: pd.DataFrame) -> List[ClassSession]:
    df = normalize_dataframe(df)

    missing = [c for c in IMPORT_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(f"Missing column(s): {', '.join(missing)}.")
    if df.empty:
        raise ValidationError("The uploaded sheet has no rows.")

    sessions: List[ClassSession] = []
    # Header is line 1 of the file
    for line_no, (_, row) in enumerate(df.iterrows(), start=2):
        values = {c: _cell(row, c) for c in IMPORT_COLUMNS}
        if not all(values.values()):
            raise ValidationError(f"Row {line_no}: every column must be filled.")

        values["start"] = _hhmm(values["start"])
        values["end"] = _hhmm(values["end"])
        day = values["day"].capitalize()
        if day not in DAYS:
            raise ValidationError(f"Row {line_no}: unknown day {values['day']!r}.")

        label = f"row {line_no}"
        if _minutes(values["end"], label) <= _minutes(values["start"], label):
            raise ValidationError(f"Row {line_no}: end time must be after start time.")

        sessions.append(
            ClassSession(
                department=values["department"],
                day=day,
                subject=values["subject"],
                faculty=values["faculty"],
                start=values["start"],
                end=values["end"],
            )
        )
    return sessions


def import_file(store: TimetableStore, uploaded_file) -> List[ClassSession]:
    """Read an uploaded .csv/.xlsx and commit every row, or none."""
    try:
        if uploaded_file.name.lower().endswith(".csv"):
            df = pd.read_csv(uploaded_file, dtype=str)
        else:
            df = pd.read_excel(uploaded_file, dtype=str)
    except Exception as e:
        raise ValidationError(f"Error reading {uploaded_file.name}: {e}")

    sessions = sessions_from_dataframe(df)
    store.append(sessions)
    logger.info("Imported %d session(s) from %s", len(sessions), uploaded_file.name)
    return sessions
