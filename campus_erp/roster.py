"""
campus_erp/roster.py

Purpose
-------
Owns the student roster: the only mutable state in the dashboard.

The UI never edits records directly. It calls the command methods on
RosterStore (admit, pay_fees, toggle_hostel) and re-renders from a snapshot.
Keeping these rules here means the same store can back the Streamlit app,
a notebook, or the tests without change.

Injected collaborators:
  - clock       : zero-arg callable returning datetime.date (admission dates)
  - id_factory  : zero-arg callable returning a new student id
"""

from __future__ import annotations

import logging
import math
import random
import string
import threading
from dataclasses import asdict, dataclass, replace
from datetime import date
from numbers import Real
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

logger = logging.getLogger(__name__)


ID_ALPHABET = string.ascii_uppercase + string.digits
ID_LENGTH = 7
MAX_ID_ATTEMPTS = 10
RECENT_LIMIT = 6

Clock = Callable[[], date]
IdFactory = Callable[[], str]


# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------
class RosterError(Exception):
    """Base class for roster failures surfaced to the user."""


class ValidationError(RosterError, ValueError):
    """A required field is missing or a value is not acceptable."""


class NotFoundError(RosterError, LookupError):
    """No record with the requested id exists."""

    def __init__(self, student_id: str):
        super().__init__(f"No student with id {student_id!r}")
        self.student_id = student_id


class StoreDiscardedError(RosterError, RuntimeError):
    """The store has been discarded and can no longer be used."""


# ---------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class StudentRecord:
    """
    One admitted student.

    Records are immutable values; the store swaps in an updated copy when
    fees are paid or a hostel is toggled, so a record handed to the UI never
    changes underneath it.
    """
    id: str
    name: str
    branch: str
    year: int
    admission_date: date
    hostel: Optional[str] = None
    fees_paid: Real = 0

    def to_dict(self) -> Dict[str, object]:
        row = asdict(self)
        row["admission_date"] = self.admission_date.isoformat()
        return row


@dataclass(frozen=True)
class Admission:
    """Candidate submitted by the admission form."""
    name: str
    branch: str
    year: int = 1
    hostel: Optional[str] = None
    fees_paid: Real = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Admission":
        """
        Build a candidate from a plain dict.

        Accepts both ``fees_paid`` and the form-style ``feesPaid`` key.
        Missing name/branch become empty strings so that validation reports
        them instead of a TypeError.
        """
        fees = data.get("fees_paid", data.get("feesPaid"))
        year = data.get("year")
        return cls(
            name=data.get("name") or "",
            branch=data.get("branch") or "",
            year=1 if year is None else year,
            hostel=data.get("hostel"),
            fees_paid=0 if fees is None else fees,
        )


# ---------------------------------------------------------------------
# Defaults for injected collaborators
# ---------------------------------------------------------------------
_rng = random.SystemRandom()


def generate_student_id() -> str:
    """Random short uppercase alphanumeric code, e.g. 'K7Q2ZP1'."""
    return "".join(_rng.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _clean_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _clean_label(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    label = str(value).strip()
    return label or None


def unique_id(id_factory: IdFactory, taken: Set[str]) -> str:
    """
    Draw ids from ``id_factory`` until one is not in ``taken``.

    Raises
    ------
    RuntimeError
        If MAX_ID_ATTEMPTS draws in a row are empty or already taken.
    """
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = str(id_factory())
        if candidate and candidate not in taken:
            return candidate
        logger.debug("Discarding colliding student id %r", candidate)
    raise RuntimeError(f"Could not generate a unique student id after {MAX_ID_ATTEMPTS} attempts.")


# ---------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------
class SearchResults:
    """
    Lazy, restartable view of the records matching a query.

    Matching happens on iteration, against the snapshot taken when the
    search was issued. Iterating twice yields the same records.
    """

    def __init__(self, records: Tuple[StudentRecord, ...], query: str):
        self._records = records
        self._needle = (query or "").lower()

    @property
    def query(self) -> str:
        return self._needle

    def _matches(self, record: StudentRecord) -> bool:
        haystack = " ".join([record.name, record.branch, record.id]).lower()
        return self._needle in haystack

    def __iter__(self) -> Iterator[StudentRecord]:
        return (r for r in self._records if self._matches(r))

    def __repr__(self) -> str:
        return f"SearchResults(query={self._needle!r}, scanned={len(self._records)})"


# ---------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------
class RosterStore:
    """
    Ordered, most-recent-first sequence of StudentRecords.

    Parameters
    ----------
    clock : Clock, optional
        Provides today's date for new admissions. Defaults to date.today.
    id_factory : IdFactory, optional
        Provides candidate ids; collisions with existing ids are retried.
        Defaults to generate_student_id.
    records : Iterable[StudentRecord]
        Optional initial roster, kept in the given order.

    Notes
    -----
    Every public method holds the store lock for its whole duration and
    validates before it mutates, so a failed call leaves the roster as it was.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        records: Iterable[StudentRecord] = (),
    ):
        self.clock = clock or date.today
        self.id_factory = id_factory or generate_student_id
        # hostel labels are stored stripped, with blanks as None
        self._records: List[StudentRecord] = [
            replace(r, hostel=_clean_label(r.hostel)) for r in records
        ]
        self._lock = threading.RLock()
        self._discarded = False

        ids = [r.id for r in self._records]
        if len(set(ids)) != len(ids):
            raise ValidationError("Initial roster contains duplicate ids.")

    def __repr__(self) -> str:
        return f"RosterStore(students={len(self)}, discarded={self._discarded})"

    # --- lifecycle ---------------------------------------------------

    def discard(self) -> None:
        with self._lock:
            self._records.clear()
            self._discarded = True

    @property
    def discarded(self) -> bool:
        return self._discarded

    def _check_open(self) -> None:
        if self._discarded:
            raise StoreDiscardedError("Roster store has been discarded.")

    # --- queries -----------------------------------------------------

    def snapshot(self) -> Tuple[StudentRecord, ...]:
        with self._lock:
            self._check_open()
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.snapshot())

    def __contains__(self, student_id: object) -> bool:
        with self._lock:
            return any(r.id == student_id for r in self._records)

    def _index_of(self, student_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.id == student_id:
                return i
        raise NotFoundError(student_id)

    def get(self, student_id: str) -> StudentRecord:
        with self._lock:
            self._check_open()
            return self._records[self._index_of(student_id)]

    def search(self, query: str = "") -> SearchResults:
        return SearchResults(self.snapshot(), query)

    def recent(self, limit: int = RECENT_LIMIT) -> List[StudentRecord]:
        return list(self.snapshot()[:max(limit, 0)])

    def hostel_residents(self) -> List[StudentRecord]:
        return [r for r in self.snapshot() if r.hostel is not None]

    # --- commands ----------------------------------------------------

    def _new_id(self) -> str:
        return unique_id(self.id_factory, {r.id for r in self._records})

    def admit(self, candidate: Union[Admission, Mapping[str, object]]) -> StudentRecord:
        """
        Create a record for a new student and put it at the front of the roster.

        Raises
        ------
        ValidationError
            If name or branch is empty, or fees_paid is not a non-negative number.
        """
        if not isinstance(candidate, Admission):
            candidate = Admission.from_mapping(candidate)

        name = _clean_text(candidate.name)
        branch = _clean_text(candidate.branch)
        if not name or not branch:
            logger.warning("Rejected admission with missing name or branch: %r", candidate)
            raise ValidationError("Name and branch required")
        if not _is_number(candidate.fees_paid) or candidate.fees_paid < 0:
            logger.warning("Rejected admission with invalid fees_paid: %r", candidate.fees_paid)
            raise ValidationError("fees_paid must be a non-negative number")

        with self._lock:
            self._check_open()
            record = StudentRecord(
                id=self._new_id(),
                name=name,
                branch=branch,
                year=candidate.year,
                admission_date=self.clock(),
                hostel=_clean_label(candidate.hostel),
                fees_paid=candidate.fees_paid,
            )
            self._records.insert(0, record)

        logger.info("Admitted %s (%s, %s)", record.id, record.name, record.branch)
        return record

    def pay_fees(self, student_id: str, amount: Real) -> StudentRecord:
        """Add a positive payment to a student's fees_paid total."""
        with self._lock:
            self._check_open()
            try:
                idx = self._index_of(student_id)
            except NotFoundError:
                logger.warning("Payment for unknown student %r", student_id)
                raise
            if not _is_number(amount) or amount <= 0:
                logger.warning("Rejected payment of %r for %s", amount, student_id)
                raise ValidationError("Payment amount must be a positive number")

            current = self._records[idx]
            updated = replace(current, fees_paid=current.fees_paid + amount)
            self._records[idx] = updated

        logger.info("Recorded payment of %s for %s (total %s)", amount, student_id, updated.fees_paid)
        return updated

    def toggle_hostel(self, student_id: str, label: str) -> StudentRecord:
        """
        Assign ``label`` to the student, or release it if already assigned.

        A student holding a different hostel is moved to ``label``. The label
        is stripped first, as on admission; a blank label releases.
        """
        label = _clean_label(label)
        with self._lock:
            self._check_open()
            try:
                idx = self._index_of(student_id)
            except NotFoundError:
                logger.warning("Hostel toggle for unknown student %r", student_id)
                raise

            current = self._records[idx]
            new_hostel = None if current.hostel == label else label
            updated = replace(current, hostel=new_hostel)
            self._records[idx] = updated

        if new_hostel is None:
            logger.info("Released %s from hostel %s", student_id, current.hostel)
        else:
            logger.info("Allocated %s to hostel %s", student_id, new_hostel)
        return updated

    def release_hostel(self, student_id: str) -> StudentRecord:
        with self._lock:
            current = self.get(student_id)
            if current.hostel is None:
                return current
            return self.toggle_hostel(student_id, current.hostel)
