from builder import SubjectEntry, submit
from config import DAYS
from models import ClassSession
from views import (
    build_grid,
    department_grids,
    faculty_line,
    faculty_sessions,
    grid_to_dataframe,
    grid_view,
    group_by_day,
    summarize,
    summary_metrics,
)


def _s(day, subject, start, end, dept="CS", faculty="Dr. A"):
    return ClassSession(dept, day, subject, faculty, start, end)


def test_empty_input_gives_empty_grid():
    assert build_grid([]) == []


def test_grid_shape_and_order():
    sessions = [
        _s("Monday", "Late", "14:00", "15:00"),
        _s("Monday", "Early", "08:00", "09:00"),
        _s("Wednesday", "Mid", "11:00", "12:00"),
    ]
    grid = build_grid(sessions)
    assert len(grid) == 2
    assert all(len(row) == len(DAYS) for row in grid)

    monday = DAYS.index("Monday")
    wednesday = DAYS.index("Wednesday")
    assert grid[0][monday].subject == "Early"
    assert grid[1][monday].subject == "Late"
    assert grid[0][wednesday].subject == "Mid"
    assert grid[1][wednesday] is None
    assert grid[0][DAYS.index("Saturday")] is None


def test_equal_start_keeps_entry_order():
    sessions = [
        _s("Tuesday", "First", "09:00", "10:00"),
        _s("Tuesday", "Second", "09:00", "09:30"),
        _s("Tuesday", "Earlier", "08:00", "09:00"),
    ]
    col = [row[DAYS.index("Tuesday")].subject for row in build_grid(sessions)]
    assert col == ["Earlier", "First", "Second"]


def test_aggregator_is_idempotent():
    sessions = [_s("Friday", "B", "10:00", "11:00"), _s("Friday", "A", "09:00", "10:00")]
    before = list(sessions)
    assert build_grid(sessions) == build_grid(sessions)
    assert sessions == before


def test_student_scenario(store):
    submit(store, "CS", "Monday", [SubjectEntry("Algorithms", "Dr. A", "09:00", "10:00")])
    grid = build_grid(store.query_by_department("CS"))
    monday = [row[DAYS.index("Monday")] for row in grid if row[DAYS.index("Monday")]]
    assert len(monday) == 1
    assert grid[0][DAYS.index("Monday")].subject == "Algorithms"


def test_department_grids_are_independent(store):
    store.append([
        _s("Monday", "A1", "08:00", "09:00", dept="EE"),
        _s("Monday", "C1", "08:00", "09:00"),
        _s("Monday", "C2", "09:00", "10:00"),
        _s("Monday", "C3", "10:00", "11:00"),
    ])
    grids = department_grids(store)
    assert list(grids) == ["CS", "EE"]
    assert len(grids["CS"]) == 3
    assert len(grids["EE"]) == 1


def test_grid_view_and_dataframe():
    grid = build_grid([_s("Monday", "Algorithms", "09:00", "10:00")])
    cell = grid_view(grid)[0][0]
    assert cell["time_label"] == "9:00 AM - 10:00 AM"
    assert cell["color"].startswith("#")
    assert grid_view(grid)[0][1] is None

    df = grid_to_dataframe(grid)
    assert list(df.columns) == DAYS
    assert df.loc[0, "Monday"] == "9:00 AM - 10:00 AM\nAlgorithms\nDr. A"
    assert df.loc[0, "Tuesday"] == ""


def test_faculty_lookup_is_case_insensitive(store):
    store.append([
        _s("Monday", "Algorithms", "09:00", "10:00", faculty="Dr. A"),
        _s("Monday", "Circuits", "09:00", "10:00", dept="EE", faculty="Dr. B"),
    ])
    found = faculty_sessions(store, "dr. a")
    assert [s.subject for s in found] == ["Algorithms"]


def test_faculty_sort_and_grouping(store):
    store.append([
        _s("Wednesday", "W", "08:00", "09:00"),
        _s("Monday", "M-late", "15:00", "16:00"),
        _s("Friday", "F", "08:00", "09:00"),
        _s("Monday", "M-early", "08:00", "09:00"),
    ])
    found = faculty_sessions(store, "Dr. A")
    # day names compare as text
    assert [s.subject for s in found] == ["F", "M-early", "M-late", "W"]

    groups = group_by_day(found)
    assert list(groups) == ["Monday", "Wednesday", "Friday"]
    assert [s.subject for s in groups["Monday"]] == ["M-early", "M-late"]


def test_faculty_no_classes(store):
    assert group_by_day(faculty_sessions(store, "Nobody")) == {}


def test_faculty_line():
    s = _s("Monday", "Algorithms", "09:00", "10:00")
    assert faculty_line(s) == "9:00 AM - 10:00 AM — CS — Algorithms"


def test_summarize(store):
    store.append([
        _s("Monday", "A", "08:00", "09:00"),
        _s("Monday", "B", "09:00", "10:00"),
        _s("Friday", "C", "09:00", "10:00", dept="EE"),
    ])
    table = summarize(list(store))
    assert list(table.columns) == DAYS
    assert table.loc["CS", "Monday"] == 2
    assert table.loc["EE", "Friday"] == 1
    assert table.loc["EE", "Monday"] == 0

    assert summary_metrics(store) == {"sessions": 3, "departments": 2, "faculty": 1, "subjects": 3}


def test_summarize_empty():
    assert summarize([]).empty
