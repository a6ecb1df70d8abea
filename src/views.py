# views.py
"""
Read-side of the timetable: grids for departments and students, day lists
for faculty, and a count summary for the admin panel.

Nothing here touches storage or Streamlit; every function maps a list of
sessions to a display structure and can be called any number of times.
"""

from typing import Any, Dict, List, Optional

import pandas as pd

from config import DAYS
from models import ClassSession
from timetable import TimetableStore
from timeslots import deterministic_color

Grid = List[List[Optional[ClassSession]]]


# ================================================================
# Aggregator grid (day columns x rank rows)
# ================================================================

def bucket_by_day(sessions: List[ClassSession]) -> Dict[str, List[ClassSession]]:
    """Monday..Saturday buckets, each ordered by start time.

    sorted() is stable, so sessions that start together keep the order
    they were entered in.
    """
    buckets: Dict[str, List[ClassSession]] = {d: [] for d in DAYS}
    for s in sessions:
        if s.day in buckets:
            buckets[s.day].append(s)
    return {d: sorted(col, key=lambda s: s.start_minutes) for d, col in buckets.items()}


def build_grid(sessions: List[ClassSession]) -> Grid:
    cols = bucket_by_day(sessions)
    max_rows = max([len(col) for col in cols.values()] + [0])
    return [
        [cols[d][r] if r < len(cols[d]) else None for d in DAYS]
        for r in range(max_rows)
    ]


def department_grids(store: TimetableStore) -> Dict[str, Grid]:
    """One independent grid per department, departments in name order."""
    return {dept: build_grid(store.query_by_department(dept)) for dept in store.all_departments()}


# ----------------------------------------------------------------
# View models
# ----------------------------------------------------------------

def cell_view(session: Optional[ClassSession]) -> Optional[Dict[str, str]]:
    if session is None:
        return None
    return {
        "time_label": session.time_label,
        "subject": session.subject,
        "faculty": session.faculty,
        "color": deterministic_color(session.subject),
    }


def grid_view(grid: Grid) -> List[List[Optional[Dict[str, str]]]]:
    return [[cell_view(c) for c in row] for row in grid]


def grid_to_dataframe(grid: Grid) -> pd.DataFrame:
    """Plain-text table for st.dataframe: one column per day."""
    rows = [
        [f"{c.time_label}\n{c.subject}\n{c.faculty}" if c else "" for c in row]
        for row in grid
    ]
    return pd.DataFrame(rows, columns=DAYS)


# ================================================================
# Faculty lookup
# ================================================================

def faculty_sessions(store: TimetableStore, name: str) -> List[ClassSession]:
    """Case-insensitive match, sorted by day name then start time."""
    found = store.query_by_faculty(name)
    return sorted(found, key=lambda s: (s.day, s.start_minutes))


def group_by_day(sessions: List[ClassSession]) -> Dict[str, List[ClassSession]]:
    """Day headings in week order; days without classes are left out."""
    return {d: col for d, col in bucket_by_day(sessions).items() if col}


def faculty_line(session: ClassSession) -> str:
    return f"{session.time_label} — {session.department} — {session.subject}"


# ================================================================
# Summary (admin panel)
# ================================================================

def summarize(sessions: List[ClassSession]) -> pd.DataFrame:
    """Session counts per department (rows) and day (columns)."""
    if not sessions:
        return pd.DataFrame(columns=DAYS)
    df = pd.DataFrame([s.as_dict() for s in sessions])
    table = df.pivot_table(
        index="department",
        columns="day",
        values="subject",
        aggfunc="count",
        fill_value=0,
    )
    return table.reindex(columns=DAYS, fill_value=0).astype(int)


def summary_metrics(store: TimetableStore) -> Dict[str, Any]:
    sessions = list(store)
    return {
        "sessions": len(sessions),
        "departments": len(store.all_departments()),
        "faculty": len({s.faculty.lower() for s in sessions}),
        "subjects": len({s.subject for s in sessions}),
    }
