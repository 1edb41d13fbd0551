from streamlit.testing.v1 import AppTest

from campus_erp.roster import RosterStore, ValidationError

APP_PATH = "../app/streamlit_app.py"


class ClosedHostelStore(RosterStore):
    """Store whose hostel commands are always rejected."""

    def toggle_hostel(self, student_id, label):
        raise ValidationError(f"Hostel {label} is closed")

    def release_hostel(self, student_id):
        raise ValidationError("Hostel is closed")


def _app(store, page):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["store"] = store
    at.session_state["page"] = page
    return at.run()


def test_rejected_hostel_toggle_keeps_error_visible(populated, clock, id_factory):
    store = ClosedHostelStore(clock=clock, id_factory=id_factory, records=populated.snapshot())
    at = _app(store, "Students")
    assert not at.exception

    at.button(key="toggle-T1").click().run()

    assert [e.value for e in at.error] == ["Hostel A is closed"]
    assert store.get("T1").hostel == "A"


def test_rejected_release_keeps_error_visible(populated, clock, id_factory):
    store = ClosedHostelStore(clock=clock, id_factory=id_factory, records=populated.snapshot())
    at = _app(store, "Hostel")

    at.button(key="release-T2").click().run()

    assert [e.value for e in at.error] == ["Hostel is closed"]
    assert store.get("T2").hostel == "B"


def test_successful_toggle_updates_roster(populated):
    at = _app(populated, "Students")

    at.button(key="toggle-T3").click().run()

    assert not at.error
    assert populated.get("T3").hostel == "A"
