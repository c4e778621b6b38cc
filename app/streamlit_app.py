import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
from dataclasses import replace

import pandas as pd
import streamlit as st

from examplan.io_utils import (
    load_exams, load_groups, load_modules, load_rooms, load_teachers, write_exams
)
from examplan.models import Snapshot
from examplan.demo_data import generate_snapshot
from examplan.scheduling.availability import get_available_surveillants
from examplan.scheduling.conflicts import check_exam_conflicts, check_surveillant_conflicts
from examplan.scheduling.evaluation import find_all_conflicts, summary
from examplan.scheduling.workload import (
    invigilation_status, module_name, required_surveillants, teacher_status, teacher_workload
)
from examplan.algorithms.greedy import auto_assign_all, auto_assign_surveillants, merge_surveillants

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="ExamPlan – Surveillants", layout="wide")
st.title("ExamPlan – Conflicts & Surveillant Assignment")

# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _bytes_of(upload):
    if upload is None:
        return None
    return upload.getvalue()

def _load_optional(loader, data: bytes):
    return loader(io.BytesIO(data)) if data is not None else {}

def exams_frame(snapshot: Snapshot) -> pd.DataFrame:
    rows = []
    for e in snapshot.exams.values():
        rows.append({
            "id": e.id,
            "module": module_name(snapshot, e.module_id),
            "date": e.date.isoformat(),
            "start": e.start_time.strftime("%H:%M"),
            "duration": e.duration,
            "type": e.type,
            "rooms": ", ".join(snapshot.room(r).name for r in e.room_ids if snapshot.room(r)),
            "surveillants": ", ".join(snapshot.teacher(t).name for t in e.surveillant_ids if snapshot.teacher(t)),
            "invigilation": invigilation_status(e),
            "status": e.status,
        })
    return pd.DataFrame(rows)

def workload_frame(snapshot: Snapshot) -> pd.DataFrame:
    workload = teacher_workload(snapshot)
    rows = []
    for t in snapshot.teachers.values():
        rows.append({"id": t.id, "teacher": t.name, "email": t.email,
                     "exams": workload[t.id], "status": teacher_status(workload, t.id)[1]})
    return pd.DataFrame(rows)

def save_exam(exam):
    """Persist one updated exam into the session snapshot."""
    st.session_state.snapshot = st.session_state.snapshot.with_exam(exam)

# ---------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------
st.subheader("Inputs")
mode = st.radio("Input mode", ["CSV upload", "Synthetic"], horizontal=True)

with st.form("inputs"):
    if mode == "CSV upload":
        c1, c2, c3 = st.columns(3)
        exams_file = c1.file_uploader("Exams CSV", type=["csv"])
        rooms_file = c2.file_uploader("Rooms CSV (id,name,capacity,location)", type=["csv"])
        teachers_file = c3.file_uploader("Teachers CSV (id,name,email,...)", type=["csv"])
        c4, c5 = st.columns(2)
        modules_file = c4.file_uploader("Modules CSV (id,code,name,semester_id,teacher_id)", type=["csv"])
        groups_file = c5.file_uploader("(Optional) Groups CSV", type=["csv"])
    else:
        c1, c2, c3, c4, c5 = st.columns(5)
        n_exams = c1.number_input("Exams", 1, 500, 20)
        n_teachers = c2.number_input("Teachers", 1, 200, 12)
        n_rooms = c3.number_input("Rooms", 1, 100, 6)
        n_modules = c4.number_input("Modules", 1, 200, 10)
        seed = c5.number_input("Seed", 0, 10_000, 42)
    loaded = st.form_submit_button("Load")

if loaded:
    try:
        if mode == "CSV upload":
            if exams_file is None:
                st.error("Exams CSV is required.")
                st.stop()
            st.session_state.snapshot = Snapshot(
                rooms=_load_optional(load_rooms, _bytes_of(rooms_file)),
                teachers=_load_optional(load_teachers, _bytes_of(teachers_file)),
                modules=_load_optional(load_modules, _bytes_of(modules_file)),
                groups=_load_optional(load_groups, _bytes_of(groups_file)),
                exams=load_exams(io.BytesIO(_bytes_of(exams_file))),
            )
        else:
            st.session_state.snapshot = generate_snapshot(
                n_teachers=int(n_teachers), n_rooms=int(n_rooms), n_modules=int(n_modules),
                n_exams=int(n_exams), seed=int(seed))
    except (ValueError, KeyError) as e:
        st.error(f"Could not read input: {e}")
        st.stop()

if "snapshot" not in st.session_state:
    st.info("Load CSVs or generate a synthetic snapshot to start.")
    st.stop()

snapshot: Snapshot = st.session_state.snapshot

# ---------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------
st.subheader("Overview")
st.code(summary(snapshot))
left, right = st.columns([3, 2])
left.dataframe(exams_frame(snapshot), use_container_width=True, hide_index=True)
right.dataframe(workload_frame(snapshot), use_container_width=True, hide_index=True)

all_conflicts = find_all_conflicts(snapshot)
if all_conflicts:
    with st.expander(f"Conflicts ({len(all_conflicts)} exam(s))"):
        for exam_id, conflicts in all_conflicts.items():
            for c in conflicts:
                st.warning(f"Exam {exam_id} – {c.type}: \"{c.exam_name}\" on {c.time}")

# ---------------------------------------------------------------------
# Surveillant assignment
# ---------------------------------------------------------------------
st.subheader("Surveillant assignment")
exam_ids = list(snapshot.exams.keys())
if not exam_ids:
    st.info("No exams in this snapshot.")
    st.stop()
exam_id = st.selectbox("Exam", exam_ids,
                       format_func=lambda i: f"{i} – {module_name(snapshot, snapshot.exam(i).module_id)} "
                                             f"({snapshot.exam(i).when})")
exam = snapshot.exam(exam_id)

for c in check_exam_conflicts(snapshot, exam):
    st.warning(f"{c.type.capitalize()} conflict with \"{c.exam_name}\" (exam {c.exam_id}) on {c.time}")

available = get_available_surveillants(snapshot, exam.date, exam.start_time, exam.duration,
                                       exclude_exam_id=exam.id)
# Manual selection offers every teacher; conflicts are shown, not enforced.
chosen = st.multiselect("Surveillants", list(snapshot.teachers.keys()),
                        default=[t for t in exam.surveillant_ids if t in snapshot.teachers],
                        format_func=lambda t: snapshot.teacher(t).name)
manual_conflicts = check_surveillant_conflicts(snapshot, exam.date, exam.start_time, exam.duration,
                                               chosen, exclude_exam_id=exam.id)
for c in manual_conflicts:
    st.warning(f"{', '.join(c.surveillants)} already assigned to \"{c.exam_name}\" at {c.time}")
st.caption(f"{len(available)} teacher(s) free in this slot: " + ", ".join(t.name for t in available))

b1, b2, b3 = st.columns(3)
count = b2.number_input("How many", 1, 20, min(20, required_surveillants(exam)))
if b1.button("Save selection"):
    save_exam(replace(exam, surveillant_ids=list(chosen)))
    st.rerun()
if b2.button("Auto-assign"):
    ids = auto_assign_surveillants(snapshot, exam.id, int(count))
    if not ids:
        st.error("No available surveillants for this exam.")
    else:
        save_exam(replace(exam, surveillant_ids=merge_surveillants(exam.surveillant_ids, ids)))
        st.rerun()
if b3.button("Auto-assign all unassigned"):
    _, picked = auto_assign_all(snapshot, on_assign=save_exam)
    missing = [i for i, ids in picked.items() if not ids]
    if missing:
        st.error("No available surveillants for exam(s): " + ", ".join(map(str, missing)))
    else:
        st.rerun()

buf = io.StringIO()
write_exams(buf, st.session_state.snapshot.exams.values())
st.download_button("Download exams.csv", buf.getvalue(), file_name="exams.csv", mime="text/csv")
