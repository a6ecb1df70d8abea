# app.py
import time
from html import escape
from datetime import timedelta
from typing import Dict, List, Optional

import streamlit as st

from config import (
    DAYS,
    MAX_SUBJECTS,
    POLL_INTERVAL_SECONDS,
    REMINDER_DISPLAY_SECONDS,
    REMINDER_LEAD_MINUTES,
    configure_logging,
)
from builder import SubjectEntry, ValidationError, clamp_subject_count, import_file, submit
from context import AppContext
from export import create_ics_file, sessions_to_csv
from models import ClassSession
from timeslots import deterministic_color
from views import (
    Grid,
    build_grid,
    department_grids,
    faculty_line,
    grid_to_dataframe,
    grid_view,
    summarize,
    summary_metrics,
)


configure_logging()

# -----------------------------------------------------------
# Streamlit Config
# -----------------------------------------------------------
st.set_page_config(layout="wide", page_title="College Time Scheduler") # type: ignore

st.markdown("""
<style>
    .tt-table { width: 100%; border-collapse: collapse; background: #fff; border-radius: 12px; overflow: hidden; }
    .tt-table th, .tt-table td { border: 1px solid #e7e7e7; padding: 10px; text-align: center; vertical-align: top; }
    .tt-table th { background: #4a90e2; color: #fff; font-weight: 600; }
    .tt-muted { color: #666; font-weight: 500; font-size: 0.85rem; }
    .tt-pill { padding: 8px 10px; border-radius: 10px; color: #fff; font-weight: 600; margin-top: 6px; }
    .tt-reminder { background: #fffbcc; color: #333; padding: 1rem 1.25rem; border-radius: 8px;
                   box-shadow: 0 6px 16px rgba(0,0,0,0.2); margin-bottom: 8px; }
</style>
""", unsafe_allow_html=True)


# -----------------------------------------------------------
# Session State
# -----------------------------------------------------------
if "ctx" not in st.session_state:
    st.session_state.ctx = AppContext.from_path()
if "role" not in st.session_state:
    st.session_state.role = None
if "notifications" not in st.session_state:
    st.session_state.notifications = []
if "show_generated" not in st.session_state:
    st.session_state.show_generated = False
if "student_view" not in st.session_state:
    st.session_state.student_view = None
if "faculty_view" not in st.session_state:
    st.session_state.faculty_view = None

ctx: AppContext = st.session_state.ctx


# -----------------------------------------------------------
# Navigation
# -----------------------------------------------------------

def select_role(role: str):
    st.session_state.role = role


def go_back():
    st.session_state.role = None
    st.session_state.show_generated = False
    st.session_state.student_view = None
    st.session_state.faculty_view = None


# -----------------------------------------------------------
# Rendering helpers
# -----------------------------------------------------------

def render_grid(grid: Grid):
    """Day columns, one coloured pill per session."""
    cells = grid_view(grid)
    head = "".join(f"<th>{d}</th>" for d in DAYS)
    body = ""
    for row in cells:
        body += "<tr>"
        for cell in row:
            if cell:
                body += (
                    f'<td><div class="tt-muted">{escape(cell["time_label"])}</div>'
                    f'<div class="tt-pill" style="background:{cell["color"]}">'
                    f'{escape(cell["subject"])}<br><span style="font-weight:500">{escape(cell["faculty"])}</span>'
                    f"</div></td>"
                )
            else:
                body += "<td></td>"
        body += "</tr>"
    st.markdown(f'<table class="tt-table"><tr>{head}</tr>{body}</table>', unsafe_allow_html=True)


def render_faculty_list(groups: Dict[str, List[ClassSession]]):
    if not groups:
        st.info("No classes found for you.")
        return
    for day, sessions in groups.items():
        st.markdown(f"### {day}")
        for s in sessions:
            st.markdown(
                f'<div class="tt-pill" style="background:{deterministic_color(s.subject)}">'
                f"{escape(faculty_line(s))}</div>",
                unsafe_allow_html=True,
            )


def download_buttons(sessions: List[ClassSession], stem: str):
    d1, d2 = st.columns(2)
    d1.download_button(
        "📅 Download .ics",
        create_ics_file(sessions),
        f"{stem}.ics",
        "text/calendar",
    )
    d2.download_button(
        "⬇️ Download CSV",
        sessions_to_csv(sessions),
        f"{stem}.csv",
        "text/csv",
    )


# -----------------------------------------------------------
# Reminders
# -----------------------------------------------------------

def show_reminder(msg: str):
    st.session_state.notifications.append({
        "msg": msg,
        "until": time.time() + REMINDER_DISPLAY_SECONDS,
    })
    st.toast(msg, icon="⏰")


@st.fragment(run_every=timedelta(seconds=POLL_INTERVAL_SECONDS))
def reminder_poll():
    for r in ctx.scheduler.poll():
        show_reminder(r.message)


@st.fragment(run_every=timedelta(seconds=1))
def reminder_banner():
    now = time.time()
    active = [n for n in st.session_state.notifications if n["until"] > now]
    if len(active) != len(st.session_state.notifications):
        st.session_state.notifications = active
    for n in active:
        st.markdown(f'<div class="tt-reminder">{escape(n["msg"])}</div>', unsafe_allow_html=True)


# -----------------------------------------------------------
# Admin Panel
# -----------------------------------------------------------

def admin_panel():
    st.header("🛠️ Admin")

    metrics = summary_metrics(ctx.store)
    s1, s2, s3, s4 = st.columns(4)
    s1.metric("Sessions", metrics["sessions"])
    s2.metric("Departments", metrics["departments"])
    s3.metric("Faculty", metrics["faculty"])
    s4.metric("Subjects", metrics["subjects"])

    departments = ctx.store.all_departments()
    c1, c2, c3 = st.columns([2, 1, 1])
    dept_choice = c1.selectbox("Department", ["(new department)"] + departments, key="admin_dept_select")
    if dept_choice == "(new department)":
        department = c1.text_input("New department name", key="admin_dept_new")
    else:
        department = dept_choice
    day = c2.selectbox("Day", DAYS, key="admin_day")
    n = clamp_subject_count(
        c3.number_input("Number of subjects", min_value=0, max_value=MAX_SUBJECTS, value=1, step=1, key="admin_n")
    )

    if st.session_state.get("admin_flash"):
        st.success(st.session_state.pop("admin_flash"))

    with st.form("admin_form"):
        entries: List[SubjectEntry] = []
        for i in range(n):
            f1, f2, f3, f4 = st.columns(4)
            subject = f1.text_input(f"Subject {i + 1}", key=f"sub_{i}")
            faculty = f2.text_input(f"Faculty {i + 1}", key=f"fac_{i}")
            start = f3.time_input("Start", value=None, step=60, key=f"start_{i}")
            end = f4.time_input("End", value=None, step=60, key=f"end_{i}")
            entries.append(SubjectEntry(
                subject=subject,
                faculty=faculty,
                start=start.strftime("%H:%M") if start else "",
                end=end.strftime("%H:%M") if end else "",
            ))

        if st.form_submit_button("Add to timetable", type="primary"):
            try:
                submit(ctx.store, department, day, entries)
            except ValidationError as e:
                st.error(str(e))
            else:
                # Empty the subject rows only after a successful save
                for i in range(n):
                    for prefix in ("sub_", "fac_", "start_", "end_"):
                        st.session_state.pop(f"{prefix}{i}", None)
                st.session_state.admin_flash = "Timetable entries added for the selected day!"
                st.rerun()

    b1, b2 = st.columns(2)
    if b1.button("📋 View generated timetable"):
        st.session_state.show_generated = not st.session_state.show_generated

    with b2.expander("⚠️ Reset timetable"):
        confirm = st.checkbox("I understand every session will be deleted", key="reset_confirm")
        if st.button("Delete all sessions", disabled=not confirm):
            ctx.store.clear()
            st.toast("Timetable cleared", icon="🗑️")
            st.rerun()

    with st.expander("📥 Bulk import (.csv / .xlsx)"):
        st.caption("Columns: department, day, subject, faculty, start, end (HH:MM, 24-hour).")
        uploaded = st.file_uploader("Upload sheet", type=["csv", "xlsx"], key="import_file")
        if uploaded and st.button("Import"):
            try:
                added = import_file(ctx.store, uploaded)
            except ValidationError as e:
                st.error(str(e))
            else:
                st.toast(f"✅ Imported {len(added)} sessions from {uploaded.name}")
                st.rerun()

    if st.session_state.show_generated:
        st.divider()
        st.subheader("Generated Timetable")
        grids = department_grids(ctx.store)
        if not grids:
            st.info("No sessions yet.")
        else:
            st.markdown("#### Sessions per day")
            st.dataframe(summarize(list(ctx.store)), width="stretch")
            for dept, grid in grids.items():
                st.markdown(f"## {dept} Department")
                render_grid(grid)
            download_buttons(list(ctx.store), "timetable")


# -----------------------------------------------------------
# Student Panel
# -----------------------------------------------------------

def student_panel():
    st.header("🎓 Student")
    with st.form("student_login"):
        name = st.text_input("Your name", value=ctx.student.name)
        dept = st.text_input("Department", value=ctx.student.department)
        if st.form_submit_button("Show my timetable", type="primary"):
            try:
                classes = ctx.login_student(name, dept)
            except ValidationError as e:
                st.error(str(e))
            else:
                if not classes:
                    st.session_state.student_view = None
                    st.warning("No timetable found for your department yet.")
                else:
                    st.session_state.student_view = (ctx.student.name, ctx.student.department)

    view: Optional[tuple] = st.session_state.student_view
    if view:
        name, dept = view
        classes = ctx.store.query_by_department(dept)
        st.subheader(f"{name} — {dept} Department")
        mode = st.radio("Display Mode", ["Grid", "Table"], horizontal=True)
        grid = build_grid(classes)
        if mode == "Grid":
            render_grid(grid)
        else:
            st.dataframe(grid_to_dataframe(grid), width="stretch")
        download_buttons(classes, f"{dept}_timetable")

    if ctx.scheduler.armed:
        st.caption(f"⏰ Reminders on for {ctx.student.department} ({REMINDER_LEAD_MINUTES} minutes before each class).")


# -----------------------------------------------------------
# Faculty Panel
# -----------------------------------------------------------

def faculty_panel():
    st.header("👩‍🏫 Faculty")
    with st.form("faculty_login"):
        name = st.text_input("Your name")
        if st.form_submit_button("Show my classes", type="primary"):
            try:
                st.session_state.faculty_view = ctx.login_faculty(name)
            except ValidationError as e:
                st.error(str(e))

    if st.session_state.faculty_view is not None:
        render_faculty_list(st.session_state.faculty_view)


# -----------------------------------------------------------
# Main Layout
# -----------------------------------------------------------

st.title("📅 College Time Scheduler")

reminder_banner()
reminder_poll()

role = st.session_state.role
if role is None:
    st.markdown("### Who are you?")
    r1, r2, r3 = st.columns(3)
    r1.button("🛠️ Admin", on_click=select_role, args=("admin",), width="stretch")
    r2.button("🎓 Student", on_click=select_role, args=("student",), width="stretch")
    r3.button("👩‍🏫 Faculty", on_click=select_role, args=("faculty",), width="stretch")
else:
    st.button("← Back", on_click=go_back)
    if role == "admin":
        admin_panel()
    elif role == "student":
        student_panel()
    elif role == "faculty":
        faculty_panel()
