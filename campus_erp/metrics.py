"""
campus_erp/metrics.py

Purpose
-------
Derived, read-only views of the roster used by the dashboard:
  - compute_metrics : headline counts (students, fees, hostel occupancy)
  - roster_frame    : tabular form of the roster for st.dataframe / CSV export

Both are pure functions of a roster snapshot. They never mutate records and
give identical results for identical input, so the UI can call them on every
rerun.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from campus_erp.roster import StudentRecord


# Column order used for every roster table in the UI and CSV exports.
ROSTER_COLUMNS: List[str] = [
    "id",
    "name",
    "branch",
    "year",
    "hostel",
    "fees_paid",
    "admission_date",
]


@dataclass
class Metrics:
    """
    Aggregate counts over one roster snapshot.

    occupancy_by_hostel only holds labels that at least one student has, so
    its values always sum to hostel_occupancy. Compared by value and not
    hashable (it holds a dict).
    """
    total_students: int = 0
    total_fees: float = 0
    hostel_occupancy: int = 0
    occupancy_by_hostel: Dict[str, int] = field(default_factory=dict)


def compute_metrics(records: Iterable[StudentRecord]) -> Metrics:
    """
    Recompute dashboard metrics from scratch.

    Parameters
    ----------
    records : Iterable[StudentRecord]
        A roster snapshot (a RosterStore works too, it iterates its snapshot).

    Returns
    -------
    Metrics
    """
    total_students = 0
    total_fees = 0
    occupancy: Dict[str, int] = {}

    for record in records:
        total_students += 1
        total_fees += record.fees_paid
        if record.hostel is not None:
            occupancy[record.hostel] = occupancy.get(record.hostel, 0) + 1

    return Metrics(
        total_students=total_students,
        total_fees=total_fees,
        hostel_occupancy=sum(occupancy.values()),
        occupancy_by_hostel=occupancy,
    )


def roster_frame(records: Iterable[StudentRecord]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record, in roster order.

    An empty roster still yields the expected columns so that downstream
    table/CSV code does not need a special case.
    """
    rows = [r.to_dict() for r in records]
    if not rows:
        return pd.DataFrame({c: pd.Series(dtype="object") for c in ROSTER_COLUMNS})

    df = pd.DataFrame(rows)
    return df[ROSTER_COLUMNS]
