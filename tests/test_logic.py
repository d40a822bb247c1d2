import pytest

from attendance.columns import MissingColumnsError
from attendance.logic import (
    absent_students,
    is_large_class,
    present_students,
    process_attendance_rows,
    reconcile,
    roster_status_view,
    summarize,
)
from attendance.models import ABSENT, PRESENT, AlternativeStudent, Settings


class TestReconcile:
    """Row classification against the roster"""

    def test_end_to_end_scenario(self, attendance_rows, roster_names, settings):
        result = process_attendance_rows(attendance_rows, roster_names, settings)

        assert result.present == ["Ali Khan"]
        assert result.absent == ["Sara Malik"]
        assert result.alternatives == [AlternativeStudent(clean_name="New Person", original_name="New Person")]

        ali, sara, new = result.records
        assert (ali.name, ali.status, ali.is_alternative) == ("Ali Khan", PRESENT, False)
        assert ali.original_name == "ali  khan"
        assert ali.minutes == pytest.approx(50)
        assert (sara.name, sara.status, sara.is_alternative) == ("Sara Malik", ABSENT, False)
        assert (new.name, new.status, new.is_alternative) == ("New Person", PRESENT, True)

    def test_threshold_boundary(self, settings):
        records, _ = reconcile([("Ali Khan", "48"), ("Sara Malik", "47.99")], ["Ali Khan", "Sara Malik"], settings)
        assert [r.status for r in records] == [PRESENT, ABSENT]

    def test_skips_empty_and_bots(self, roster_names, settings):
        rows = [
            (None, "60"),
            ("", "60"),
            ("   ", "60"),
            (float("nan"), "60"),
            ("Fireflies AI Notetaker", "60"),
            ("recorder@tldv.io", "60"),
            ("Ali Khan", "60"),
        ]
        records, alternatives = reconcile(rows, roster_names, settings)
        assert [r.name for r in records] == ["Ali Khan"]
        assert alternatives == []

    def test_skips_trainer(self, roster_names, settings):
        rows = [("Mohammad  Usman (BCR78)", "90"), ("muhammed usman cm", "90"), ("Ali Khan", "60")]
        records, alternatives = reconcile(rows, roster_names, settings, trainer_name="Muhammad Usman")
        assert [r.name for r in records] == ["Ali Khan"]
        assert alternatives == []

    def test_no_trainer_configured(self, roster_names, settings):
        records, alternatives = reconcile([("Muhammad Usman", "90")], roster_names, settings, trainer_name="")
        assert len(records) == 1
        assert alternatives[0].clean_name == "Muhammad Usman"

    def test_fuzzy_match_uses_roster_name(self, settings):
        roster = ["Muhammad Ali Raza"]
        records, alternatives = reconcile([("MOHAMMED ALI RAZA CMBCR 78", "1:00:00")], roster, settings)
        assert records[0].name == "Muhammad Ali Raza"
        assert not records[0].is_alternative
        assert alternatives == []

    def test_first_roster_match_wins(self, settings):
        roster = ["Ali Khan", "Alikhan"]
        records, _ = reconcile([("ALI KHAN", "60")], roster, settings)
        assert records[0].name == "Ali Khan"

    def test_alternative_listed_once(self, roster_names, settings):
        rows = [("New Person", "60"), ("new  person (BCR78)", "70"), ("NEW PERSON", "5")]
        records, alternatives = reconcile(rows, roster_names, settings)
        assert len(records) == 3
        assert alternatives == [AlternativeStudent(clean_name="New Person", original_name="New Person")]

    def test_absent_alternative_not_listed(self, roster_names, settings):
        records, alternatives = reconcile([("Visitor", "5")], roster_names, settings)
        assert records[0].is_alternative
        assert records[0].status == ABSENT
        assert alternatives == []

    def test_alternative_keeps_raw_name(self, roster_names, settings):
        _, alternatives = reconcile([("new  person (BCR78)", "60")], roster_names, settings)
        assert alternatives == [AlternativeStudent(clean_name="New Person", original_name="new  person (BCR78)")]

    def test_default_settings(self, roster_names):
        records, _ = reconcile([("Ali Khan", "48")], roster_names)
        assert records[0].status == PRESENT


class TestDerivedSets:

    def test_no_records(self, roster_names):
        assert present_students([]) == []
        assert absent_students([], roster_names) == roster_names

    def test_completeness(self, settings):
        roster = ["A One", "B Two", "C Three", "D Four"]
        rows = [("b two", "60"), ("D FOUR", "10"), ("a one", "70"), ("a one", "80"), ("Stranger", "99")]
        records, alternatives = reconcile(rows, roster, settings)
        present = present_students(records)
        absent = absent_students(records, roster)

        assert present == ["B Two", "A One"]
        assert absent == ["C Three", "D Four"]
        for name in roster:
            assert (name in present) != (name in absent)
            assert absent.count(name) <= 1
            assert present.count(name) <= 1
        assert [a.clean_name for a in alternatives] == ["Stranger"]
        assert "Stranger" not in present and "Stranger" not in absent

    def test_fresh_each_run(self, roster_names, settings):
        first, _ = reconcile([("Ali Khan", "60")], roster_names, settings)
        second, _ = reconcile([("Sara Malik", "60")], roster_names, settings)
        assert absent_students(first, roster_names) == ["Sara Malik"]
        assert absent_students(second, roster_names) == ["Ali Khan"]


class TestProcessAttendanceRows:

    def test_missing_time_column(self, roster_names):
        with pytest.raises(MissingColumnsError):
            process_attendance_rows([["Full Name", "Email"], ["Ali Khan", "a@x"]], roster_names)

    def test_missing_name_column(self, roster_names):
        with pytest.raises(MissingColumnsError):
            process_attendance_rows([["Who", "Duration"], ["Ali Khan", "60"]], roster_names)

    def test_empty_table(self, roster_names):
        with pytest.raises(ValueError):
            process_attendance_rows([], roster_names)

    def test_short_rows(self, roster_names, settings):
        rows = [["Name", "Email", "Duration"], ["Ali Khan"], ["Sara Malik", "s@x", "55"]]
        result = process_attendance_rows(rows, roster_names, settings)
        assert [r.name for r in result.records] == ["Ali Khan", "Sara Malik"]
        assert result.records[0].minutes == 0
        assert result.present == ["Sara Malik"]


class TestViews:

    def test_summary(self, attendance_rows, roster_names, settings):
        result = process_attendance_rows(attendance_rows, roster_names, settings)
        assert summarize(result) == {"present": 2, "absent": 1, "total": 3}

    def test_large_class_flag(self, roster_names):
        rows = [["Name", "Time"]] + [[f"Person {i}", "60"] for i in range(5)]
        result = process_attendance_rows(rows, roster_names)
        assert not is_large_class(result, Settings(large_class_threshold=5))
        assert is_large_class(result, Settings(large_class_threshold=4))

    def test_roster_status_view(self, attendance_rows, settings):
        roster = ["Sara Malik", "Ali Khan", "Zed Zero"]
        result = process_attendance_rows(attendance_rows, roster, settings)
        view = roster_status_view(result, roster)
        assert [row["name"] for row in view] == ["Ali Khan", "Sara Malik", "Zed Zero"]
        assert view[0] == {"name": "Ali Khan", "time": "50:00", "minutes": pytest.approx(50), "status": PRESENT}
        assert view[1]["status"] == ABSENT
        assert view[1]["time"] == "-"
        assert view[2]["minutes"] == 0
