import json

from config import TIMETABLE_KEY
from models import ClassSession
from timetable import TimetableStore


def _session(dept="CS", day="Monday", subject="Algorithms", faculty="Dr. A", start="09:00", end="10:00"):
    return ClassSession(dept, day, subject, faculty, start, end)


def test_empty_on_first_run(store):
    assert len(store) == 0
    assert store.all_departments() == []


def test_append_persists_whole_store(store, storage):
    store.append([_session(), _session(subject="Databases", start="10:00", end="11:00")])
    records = json.loads(storage.get_item(TIMETABLE_KEY))
    assert [r["subject"] for r in records] == ["Algorithms", "Databases"]


def test_round_trip_keeps_derived_fields(store, storage):
    s = _session()
    store.append([s])

    reloaded = TimetableStore.load(storage)
    (got,) = list(reloaded)
    assert got == s
    assert (got.start_minutes, got.end_minutes, got.time_label) == (540, 600, "9:00 AM - 10:00 AM")


def test_malformed_json_loads_empty(storage):
    storage.set_item(TIMETABLE_KEY, "[{oops")
    assert len(TimetableStore.load(storage)) == 0


def test_wrong_shape_loads_empty(storage):
    storage.set_item(TIMETABLE_KEY, json.dumps({"department": "CS"}))
    assert len(TimetableStore.load(storage)) == 0
    storage.set_item(TIMETABLE_KEY, json.dumps([{"department": "CS"}]))
    assert len(TimetableStore.load(storage)) == 0


def test_queries(store):
    store.append([
        _session(dept="EE", faculty="Dr. B"),
        _session(dept="CS"),
        _session(dept="ME", faculty="dr. a"),
    ])
    assert [s.department for s in store.query_by_department("CS")] == ["CS"]
    assert [s.department for s in store.query_by_faculty("DR. A")] == ["CS", "ME"]
    assert store.all_departments() == ["CS", "EE", "ME"]


def test_clear(store, storage):
    store.append([_session()])
    store.clear()
    assert len(store) == 0
    assert json.loads(storage.get_item(TIMETABLE_KEY)) == []
