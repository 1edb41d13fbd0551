"""
campus_erp/sample_data.py

Demo data for the dashboard:
  - SEED_STUDENTS       : the three students the app starts with
  - generate_roster()   : a larger, reproducible synthetic roster for demos
  - MONTHLY_ADMISSIONS,
    FEE_BREAKDOWN,
    SPARKLINES          : illustrative chart series (not derived from the roster)

Run
---
python -m campus_erp.sample_data
python -m campus_erp.sample_data --n-students 500 --random-state 7 --out data/roster.csv
"""

from __future__ import annotations

import argparse
import itertools
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from campus_erp.metrics import compute_metrics, roster_frame
from campus_erp.roster import Clock, IdFactory, RosterStore, StudentRecord, generate_student_id, unique_id

DEFAULT_OUT_PATH = Path("data/roster_synthetic.csv")

HOSTEL_LABELS = ("A", "B")

BRANCHES = [
    "Computer Engg",
    "Electronics",
    "Mechanical",
    "Civil",
    "Electrical",
    "Chemical",
]

FIRST_NAMES = [
    "Aarav", "Aisha", "Ananya", "Arjun", "Diya", "Ishaan", "Kabir", "Maya",
    "Meera", "Neha", "Priya", "Rahul", "Rohit", "Sana", "Tara", "Vikram",
]
LAST_NAMES = [
    "Verma", "Sharma", "Nair", "Iyer", "Khan", "Patel", "Reddy", "Gupta",
    "Singh", "Das", "Menon", "Joshi",
]

# (name, branch, year, hostel, fees_paid, admission_date), most recent first.
SEED_STUDENTS = [
    ("Aisha Verma", "Computer Engg", 1, "A", 15000, date(2025, 6, 15)),
    ("Rohit Sharma", "Electronics", 2, "B", 20000, date(2024, 8, 21)),
    ("Maya Nair", "Mechanical", 3, None, 0, date(2023, 7, 1)),
]

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTHLY_ADMISSIONS: Dict[str, int] = dict(
    zip(MONTHS, [45, 60, 75, 82, 95, 105, 120, 115, 100, 90, 70, 55])
)

# Percent share of collected fees by fee head.
FEE_BREAKDOWN: Dict[str, float] = {
    "Tuition Fee": 65,
    "Hostel Fee": 20,
    "Exam Fee": 8,
    "Library Fee": 5,
    "Other": 2,
}

# Trend lines drawn next to each dashboard metric card.
SPARKLINES: Dict[str, List[float]] = {
    "total_students": [3, 5, 8, 6, 9, 11],
    "total_fees": [1000, 2000, 1500, 4000, 3500],
    "hostel_occupancy": [1, 2, 2, 3, 2],
}


def _sequential_ids(prefix: str = "S", start: int = 100000) -> Callable[[], str]:
    counter = itertools.count(start)
    return lambda: f"{prefix}{next(counter)}"


def seed_store(clock: Optional[Clock] = None, id_factory: Optional[IdFactory] = None) -> RosterStore:
    """
    A RosterStore preloaded with SEED_STUDENTS, in the listed order.

    Seed records keep their historical admission dates; ``clock`` only
    applies to students admitted afterwards.
    """
    make_id = id_factory or generate_student_id

    records = []
    taken = set()
    for name, branch, year, hostel, fees, admitted in SEED_STUDENTS:
        student_id = unique_id(make_id, taken)
        taken.add(student_id)
        records.append(
            StudentRecord(
                id=student_id,
                name=name,
                branch=branch,
                year=year,
                admission_date=admitted,
                hostel=hostel,
                fees_paid=fees,
            )
        )

    return RosterStore(clock=clock, id_factory=make_id, records=records)


def generate_roster(
    n_students: int = 200,
    random_state: int = 42,
    as_of: date = date(2025, 7, 1),
) -> List[StudentRecord]:
    """
    Reproducible synthetic roster, most recent admission first.

    Same ``random_state`` -> identical records, ids included.
    """
    rng = np.random.default_rng(random_state)

    first = rng.choice(FIRST_NAMES, size=n_students)
    last = rng.choice(LAST_NAMES, size=n_students)
    branch = rng.choice(BRANCHES, size=n_students)
    year = rng.integers(1, 6, size=n_students)

    # Roughly 60% live in a hostel, split evenly between the blocks.
    in_hostel = rng.binomial(1, 0.6, size=n_students).astype(bool)
    hostel = rng.choice(HOSTEL_LABELS, size=n_students)

    # Fees are paid in 2500 instalments; later years have paid more.
    instalments = np.clip(rng.poisson(2 + year), 0, 20)
    fees_paid = instalments * 2500

    days_ago = np.sort(rng.integers(0, 365 * 5, size=n_students))

    make_id = _sequential_ids()
    records = []
    for i in range(n_students):
        records.append(
            StudentRecord(
                id=make_id(),
                name=f"{first[i]} {last[i]}",
                branch=str(branch[i]),
                year=int(year[i]),
                admission_date=as_of - timedelta(days=int(days_ago[i])),
                hostel=str(hostel[i]) if in_hostel[i] else None,
                fees_paid=int(fees_paid[i]),
            )
        )
    return records


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write a synthetic student roster to CSV.")
    parser.add_argument(
        "--n-students",
        type=int,
        default=200,
        help="Number of students to generate.",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=42,
        help="Random seed for reproducibility.",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=str(DEFAULT_OUT_PATH),
        help="Output CSV path.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    records = generate_roster(n_students=args.n_students, random_state=args.random_state)
    roster_frame(records).to_csv(out_path, index=False)

    # Print quick sanity checks
    metrics = compute_metrics(records)
    print(f"Wrote {metrics.total_students} students to {out_path}")
    print(f"Fees collected: {metrics.total_fees}")
    print(f"Hostel occupancy: {metrics.hostel_occupancy} {metrics.occupancy_by_hostel}")


if __name__ == "__main__":
    main()
