from datetime import datetime

import pytest

from context import AppContext
from storage import LocalStorage
from timetable import TimetableStore


class FakeClock:
    """Returns whatever time the test last set."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, *args) -> None:
        self.now = datetime(*args)


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "storage.json"


@pytest.fixture
def storage(storage_path):
    return LocalStorage(storage_path)


@pytest.fixture
def store(storage):
    return TimetableStore.load(storage)


@pytest.fixture
def clock():
    # 2024-01-01 is a Monday
    return FakeClock(datetime(2024, 1, 1, 8, 0))


@pytest.fixture
def ctx(storage, clock):
    return AppContext(storage, clock=clock)
