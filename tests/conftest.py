import itertools
from datetime import date

import matplotlib
import pytest

matplotlib.use("Agg")

from campus_erp.roster import RosterStore  # noqa: E402

TODAY = date(2025, 1, 10)


@pytest.fixture()
def clock():
    """Fixed clock returning TODAY."""
    return lambda: TODAY


@pytest.fixture()
def id_factory():
    """Deterministic ids: T1, T2, T3, ..."""
    counter = itertools.count(1)
    return lambda: f"T{next(counter)}"


@pytest.fixture()
def store(clock, id_factory):
    """Empty store wired to the deterministic clock and ids."""
    roster = RosterStore(clock=clock, id_factory=id_factory)
    yield roster
    roster.discard()


@pytest.fixture()
def populated(store):
    """
    Store with three students, most recent first:
    T3 Maya Nair, T2 Rohit Sharma (hostel B), T1 Aisha Verma (hostel A).
    """
    store.admit({"name": "Aisha Verma", "branch": "Computer Engg", "year": 1, "hostel": "A", "feesPaid": 15000})
    store.admit({"name": "Rohit Sharma", "branch": "Electronics", "year": 2, "hostel": "B", "feesPaid": 20000})
    store.admit({"name": "Maya Nair", "branch": "Mechanical", "year": 3})
    return store
