"""
app/streamlit_app.py

Purpose
-------
A Streamlit dashboard for the campus ERP roster that:
  - keeps one RosterStore per browser session (st.session_state)
  - shows headline metrics, recent admissions and admissions/fee charts
  - lists and searches students
  - admits new students through a form
  - allocates / releases hostel places
  - records fee payments and previews / downloads receipts

All rules live in campus_erp/*; this file only wires widgets to store
commands and renders whatever comes back.

Run
---
streamlit run app/streamlit_app.py
"""

import logging
import os
from datetime import date

import matplotlib.pyplot as plt
import streamlit as st

from campus_erp.charts import admissions_bar_chart, fee_doughnut_chart, occupancy_bar_chart, sparkline
from campus_erp.data_dictionary import DATA_DICTIONARY
from campus_erp.metrics import compute_metrics, roster_frame
from campus_erp.receipt import CURRENCY, format_amount, format_receipt, receipt_filename
from campus_erp.roster import Admission, RosterError
from campus_erp.sample_data import FEE_BREAKDOWN, HOSTEL_LABELS, MONTHLY_ADMISSIONS, SPARKLINES, seed_store

logging.basicConfig(level=os.environ.get("CAMPUS_ERP_LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

ROLES = ["Admin", "Staff", "Student"]
PAGES = ["Dashboard", "Students", "Admissions", "Hostel", "Finance"]
DEFAULT_HOSTEL = HOSTEL_LABELS[0]


# ---------------------------------------------------------------------
# Streamlit page configuration
# ---------------------------------------------------------------------
st.set_page_config(
    page_title="CampusERP",
    layout="wide",
)


# ---------------------------------------------------------------------
# Session state: one store per browser session
# ---------------------------------------------------------------------
if "store" not in st.session_state:
    st.session_state.store = seed_store()
if "page" not in st.session_state:
    st.session_state.page = "Dashboard"
if "selected_student_id" not in st.session_state:
    first = st.session_state.store.recent(1)
    st.session_state.selected_student_id = first[0].id if first else None

store = st.session_state.store


def run_command(command, *args):
    """
    Call a store command and surface domain errors instead of crashing.

    Returns the command result, or None if the store rejected it (the
    roster is unchanged in that case).
    """
    try:
        return command(*args)
    except RosterError as e:
        st.error(str(e))
        return None


def show_figure(fig):
    st.pyplot(fig)
    plt.close(fig)


def go_to(page, student_id=None):
    st.session_state.page = page
    if student_id is not None:
        st.session_state.selected_student_id = student_id


def admit_from_form():
    # Runs as a callback, before the page widgets are rebuilt.
    candidate = Admission(
        name=st.session_state.form_name,
        branch=st.session_state.form_branch,
        year=int(st.session_state.form_year),
        hostel=st.session_state.form_hostel or None,
        fees_paid=st.session_state.form_fees,
    )
    try:
        record = store.admit(candidate)
    except RosterError as e:
        st.session_state.flash = ("error", str(e))
        return
    st.session_state.flash = ("success", f"Admitted {record.name} ({record.id})")
    go_to("Students", record.id)


metrics = compute_metrics(store.snapshot())


# ---------------------------------------------------------------------
# Sidebar: navigation, cosmetic role selector, quick stats
# ---------------------------------------------------------------------
st.sidebar.title("CampusERP")
st.sidebar.caption("Integrated Student Management")

st.sidebar.radio("Go to", PAGES, key="page")

# Role only changes which buttons are shown; nothing is enforced.
role = st.sidebar.radio("Role", ROLES, horizontal=True)

st.sidebar.divider()
st.sidebar.write(f"Users: **{metrics.total_students}**")
st.sidebar.write(f"Hostel: **{metrics.hostel_occupancy}**")
st.sidebar.write(f"Fees Collected: **{CURRENCY}{format_amount(metrics.total_fees)}**")


# ---------------------------------------------------------------------
# Top bar
# ---------------------------------------------------------------------
top_left, top_right = st.columns([3, 1])
with top_left:
    query = st.text_input("Search", placeholder="Search students, branches, IDs...")
    st.caption(f"Welcome back, **{role}**")
with top_right:
    st.caption(f"Today: {date.today().isoformat()}")

page = st.session_state.page

flash = st.session_state.pop("flash", None)
if flash:
    kind, message = flash
    getattr(st, kind)(message)


# ---------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------
if page == "Dashboard":
    st.header("Dashboard")

    cards = [
        ("Total Students", metrics.total_students, SPARKLINES["total_students"]),
        ("Fees Collected", f"{CURRENCY}{format_amount(metrics.total_fees)}", SPARKLINES["total_fees"]),
        ("Hostel Occupancy", metrics.hostel_occupancy, SPARKLINES["hostel_occupancy"]),
    ]
    for col, (label, value, trend) in zip(st.columns(3), cards):
        with col:
            st.metric(label, value)
            show_figure(sparkline(trend))

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("Recent admissions")
        recent = roster_frame(store.recent())
        st.dataframe(
            recent[["name", "branch", "year", "hostel", "admission_date"]],
            use_container_width=True,
            hide_index=True,
        )

    with col2:
        st.subheader("Occupancy by hostel")
        if metrics.occupancy_by_hostel:
            for hostel, count in sorted(metrics.occupancy_by_hostel.items()):
                st.write(f"Hostel {hostel}: **{count}**")
            show_figure(occupancy_bar_chart(metrics.occupancy_by_hostel))
        else:
            st.info("No hostel data")

    # Chart series are illustrative, not computed from the roster.
    chart1, chart2 = st.columns(2)
    with chart1:
        show_figure(admissions_bar_chart(MONTHLY_ADMISSIONS))
    with chart2:
        show_figure(fee_doughnut_chart(FEE_BREAKDOWN))


# ---------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------
elif page == "Students":
    st.header("Students")

    matches = list(store.search(query))
    st.caption(f"{len(matches)} of {metrics.total_students} students")

    if not matches:
        st.info("No students match your search.")

    for s in matches:
        cols = st.columns([2, 2, 1, 1, 1, 2])
        cols[0].write(f"**{s.name}**  \n`{s.id}`")
        cols[1].write(s.branch)
        cols[2].write(str(s.year))
        cols[3].write(s.hostel or "—")
        cols[4].write(f"{CURRENCY}{format_amount(s.fees_paid)}")
        with cols[5]:
            if role != "Student":
                if st.button(f"Toggle Hostel {DEFAULT_HOSTEL}", key=f"toggle-{s.id}"):
                    if run_command(store.toggle_hostel, s.id, DEFAULT_HOSTEL) is not None:
                        st.rerun()
            st.button("Receipt", key=f"receipt-{s.id}", on_click=go_to, args=("Finance", s.id))

    with st.expander("Column descriptions"):
        for column, description in DATA_DICTIONARY.items():
            st.write(f"**{column}**: {description}")

    # Provide downloadable roster (important usability feature).
    csv = roster_frame(matches).to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download roster CSV",
        data=csv,
        file_name="roster.csv",
        mime="text/csv",
    )


# ---------------------------------------------------------------------
# Admissions
# ---------------------------------------------------------------------
elif page == "Admissions":
    st.header("Admissions")

    with st.form("admission", clear_on_submit=True):
        st.text_input("Full name", key="form_name")
        st.text_input("Branch", key="form_branch")
        st.number_input("Year", min_value=1, max_value=5, value=1, step=1, key="form_year")
        st.selectbox("Hostel (optional)", ["", *HOSTEL_LABELS], key="form_hostel")
        st.number_input("Initial fees paid", min_value=0, value=0, step=500, key="form_fees")
        st.form_submit_button("Admit Student", on_click=admit_from_form)


# ---------------------------------------------------------------------
# Hostel
# ---------------------------------------------------------------------
elif page == "Hostel":
    st.header("Hostel Management")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Allocations")
        residents = store.hostel_residents()
        if not residents:
            st.info("No allocations yet")
        for s in residents:
            left, right = st.columns([3, 1])
            left.write(f"**{s.name}**  \nHostel {s.hostel} • {s.branch}")
            if right.button("Release", key=f"release-{s.id}"):
                if run_command(store.release_hostel, s.id) is not None:
                    st.rerun()

    with col2:
        st.subheader("Manual Allocate")
        students = store.snapshot()
        ids = [s.id for s in students]
        labels = {s.id: f"{s.name} ({s.id})" for s in students}
        current = st.session_state.selected_student_id
        student_id = st.selectbox(
            "Select student",
            ids,
            index=ids.index(current) if current in ids else None,
            format_func=labels.get,
        )
        buttons = st.columns(len(HOSTEL_LABELS))
        for col, label in zip(buttons, HOSTEL_LABELS):
            if col.button(f"Assign to {label}", disabled=student_id is None):
                st.session_state.selected_student_id = student_id
                if run_command(store.toggle_hostel, student_id, label) is not None:
                    st.rerun()


# ---------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------
elif page == "Finance":
    st.header("Finance & Receipts")

    students = store.snapshot()
    ids = [s.id for s in students]
    labels = {s.id: f"{s.name} — {CURRENCY}{format_amount(s.fees_paid)}" for s in students}
    current = st.session_state.selected_student_id
    student_id = st.selectbox(
        "Choose student",
        ids,
        index=ids.index(current) if current in ids else None,
        format_func=labels.get,
    )

    if student_id is None:
        st.info("Select a student to generate receipt or record payment.")
        st.stop()

    st.session_state.selected_student_id = student_id
    student = run_command(store.get, student_id)
    if student is None:
        st.stop()

    st.write(f"**{student.name}** · {student.branch} · Year {student.year}")
    st.metric("Fees paid", f"{CURRENCY}{format_amount(student.fees_paid)}")

    pay_col, receipt_col = st.columns(2)

    with pay_col:
        amount = st.number_input("Amount", min_value=0, value=0, step=500)
        if st.button("Pay"):
            if not amount:
                st.warning("Enter amount")
            elif run_command(store.pay_fees, student.id, amount) is not None:
                st.rerun()

    with receipt_col:
        today = date.today()
        receipt = format_receipt(student, today)
        st.code(receipt, language=None)
        st.download_button(
            "Download receipt",
            data=receipt.encode("utf-8"),
            file_name=receipt_filename(student, today),
            mime="text/plain",
        )
