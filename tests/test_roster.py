import pytest

from attendance.columns import MissingColumnsError
from attendance.roster import Roster


class TestRoster:

    def test_add_cleans_and_dedupes(self):
        roster = Roster()
        assert roster.add("ali  KHAN (BCR78)")
        assert not roster.add("Ali Khan")
        assert not roster.add("   ")
        assert roster.names == ["Ali Khan"]

    def test_keeps_insertion_order(self):
        roster = Roster(["Zed", "Amy"])
        roster.add("bob")
        assert roster.names == ["Zed", "Amy", "Bob"]
        assert roster.sorted() == ["Amy", "Bob", "Zed"]

    def test_matching_variants_are_separate_entries(self):
        # uniqueness is on the display form; both spellings are kept
        roster = Roster()
        roster.add("Muhammad Ali")
        roster.add("Mohammed Ali")
        assert len(roster) == 2
        assert roster.matching_index() == {"muhammedali": "Muhammad Ali"}

    def test_remove_and_clear(self):
        roster = Roster(["Ali Khan", "Sara Malik"])
        assert roster.remove("Ali Khan")
        assert not roster.remove("Nobody")
        assert list(roster) == ["Sara Malik"]
        roster.clear()
        assert len(roster) == 0


class TestImportRows:

    def test_import(self):
        roster = Roster(["Ali Khan"])
        rows = [
            ["* Exported from Meet", None],
            ["Student Name", "Email"],
            ["ali khan", "a@x"],
            ["Sara Malik (BCR78)", "s@x"],
            [None, "blank@x"],
            ["Otter AI Notetaker", None],
            ["sara malik", "dup@x"],
        ]
        found, added = roster.import_rows(rows)
        assert found == 3
        assert added == 1
        assert roster.names == ["Ali Khan", "Sara Malik"]

    def test_missing_name_column(self):
        with pytest.raises(MissingColumnsError):
            Roster().import_rows([["Email"], ["a@x"]])

    def test_empty_table(self):
        with pytest.raises(MissingColumnsError):
            Roster().import_rows([])
