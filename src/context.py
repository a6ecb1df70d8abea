# context.py
"""
AppContext owns every piece of mutable state (storage, timetable, active
student, reminder poll). The Streamlit app builds one per browser session;
tests build one per storage file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from config import ACTIVE_DEPARTMENT_KEY, ACTIVE_NAME_KEY, STORAGE_PATH
from builder import ValidationError
from models import ActiveStudent, ClassSession
from reminders import Clock, ReminderScheduler
from storage import LocalStorage
from timetable import TimetableStore
from views import faculty_sessions, group_by_day

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(self, storage: LocalStorage, clock: Optional[Clock] = None):
        self.storage = storage
        self.store = TimetableStore.load(storage)
        self.student = ActiveStudent(
            name=storage.get_item(ACTIVE_NAME_KEY) or "",
            department=storage.get_item(ACTIVE_DEPARTMENT_KEY) or "",
        )
        self.scheduler = ReminderScheduler(self.store, self.student, clock=clock or datetime.now)

    @classmethod
    def from_path(cls, path: Union[str, Path] = STORAGE_PATH, clock: Optional[Clock] = None) -> "AppContext":
        return cls(LocalStorage(path), clock=clock)

    # -----------------------------------------------------------
    # Logins
    # -----------------------------------------------------------

    def login_student(self, name: str, department: str) -> List[ClassSession]:
        """Arms reminders for the department and returns its sessions.

        An empty list is a valid answer: the login still sticks, so
        reminders start as soon as the admin adds classes.
        """
        name = (name or "").strip()
        department = (department or "").strip()
        if not name or not department:
            raise ValidationError("Please enter your name and department.")

        # Mutate in place: the scheduler holds the same object
        self.student.name = name
        self.student.department = department
        self.storage.set_item(ACTIVE_NAME_KEY, name)
        self.storage.set_item(ACTIVE_DEPARTMENT_KEY, department)
        logger.info("Student %s logged in; reminders armed for %s", name, department)

        return self.store.query_by_department(department)

    def login_faculty(self, name: str) -> Dict[str, List[ClassSession]]:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Please enter your name.")
        return group_by_day(faculty_sessions(self.store, name))
