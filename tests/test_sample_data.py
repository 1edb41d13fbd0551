import sys
from datetime import date

import pandas as pd
import pytest

from campus_erp import sample_data
from campus_erp.metrics import ROSTER_COLUMNS, compute_metrics
from campus_erp.sample_data import (
    FEE_BREAKDOWN,
    MONTHLY_ADMISSIONS,
    SEED_STUDENTS,
    generate_roster,
    seed_store,
)


def test_seed_store_matches_demo_students(clock, id_factory):
    store = seed_store(clock=clock, id_factory=id_factory)

    records = store.snapshot()
    assert [r.name for r in records] == ["Aisha Verma", "Rohit Sharma", "Maya Nair"]
    assert [r.id for r in records] == ["T1", "T2", "T3"]
    assert records[0].admission_date == date(2025, 6, 15)
    assert records[2].hostel is None

    metrics = compute_metrics(store)
    assert metrics.total_fees == 35000
    assert metrics.occupancy_by_hostel == {"A": 1, "B": 1}


def test_seed_store_admits_with_injected_clock(clock, id_factory):
    store = seed_store(clock=clock, id_factory=id_factory)
    record = store.admit({"name": "Zara Khan", "branch": "Civil"})
    assert record.id == "T4"
    assert record.admission_date == date(2025, 1, 10)
    assert store.snapshot()[0] is record


def test_seed_store_default_ids_are_unique():
    store = seed_store()
    assert len({r.id for r in store}) == len(SEED_STUDENTS)


def test_generate_roster_is_reproducible():
    a = generate_roster(n_students=50, random_state=7)
    b = generate_roster(n_students=50, random_state=7)
    assert a == b
    assert a != generate_roster(n_students=50, random_state=8)


def test_generate_roster_shape():
    records = generate_roster(n_students=120, random_state=1, as_of=date(2025, 7, 1))

    assert len(records) == 120
    assert len({r.id for r in records}) == 120
    assert all(1 <= r.year <= 5 for r in records)
    assert all(r.hostel in (None, "A", "B") for r in records)
    assert all(r.fees_paid >= 0 for r in records)
    dates = [r.admission_date for r in records]
    assert dates == sorted(dates, reverse=True)
    assert max(dates) <= date(2025, 7, 1)


def test_illustrative_series():
    assert len(MONTHLY_ADMISSIONS) == 12
    assert sum(FEE_BREAKDOWN.values()) == 100


def test_cli_writes_csv(tmp_path, monkeypatch, capsys):
    out = tmp_path / "nested" / "roster.csv"
    monkeypatch.setattr(
        sys, "argv", ["sample_data", "--n-students", "25", "--random-state", "3", "--out", str(out)]
    )

    sample_data.main()

    df = pd.read_csv(out)
    assert list(df.columns) == ROSTER_COLUMNS
    assert len(df) == 25
    assert "Wrote 25 students" in capsys.readouterr().out


def test_seed_store_gives_up_when_ids_keep_colliding(clock):
    with pytest.raises(RuntimeError):
        seed_store(clock=clock, id_factory=lambda: "SAME")


def test_seed_store_skips_repeated_ids(clock):
    ids = iter(["A", "A", "B", "B", "C"])
    store = seed_store(clock=clock, id_factory=lambda: next(ids))
    assert [r.id for r in store] == ["A", "B", "C"]
