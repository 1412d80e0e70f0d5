"""Tests for roster CSV import."""

from scorekeeper.models import Athlete, Category
from scorekeeper.roster import RosterError, RosterImport, merge_roster, parse_roster_csv


class TestParseRosterCsv:
    def test_simple(self):
        result = parse_roster_csv("1,Alice\n2,Bob\n")
        assert result.athletes == [Athlete(1, "Alice"), Athlete(2, "Bob")]
        assert result.errors == []

    def test_header_bom_crlf_and_blank_lines(self):
        text = "\ufeffBib,Name\r\n\r\n3,Cleo\r\n4,Dan\r\n"
        result = parse_roster_csv(text)
        assert result.athletes == [Athlete(3, "Cleo"), Athlete(4, "Dan")]
        assert result.errors == []

    def test_other_header_spellings(self):
        assert parse_roster_csv("Startnummer,Name\n1,A").athletes == [Athlete(1, "A")]
        assert parse_roster_csv("#,Name\n1,A").athletes == [Athlete(1, "A")]

    def test_header_only_skipped_before_data(self):
        result = parse_roster_csv("1,A\nbib,name\n")
        assert result.athletes == [Athlete(1, "A")]
        assert result.errors == [RosterError(2, 'Invalid bib "bib" - must be a number')]

    def test_quoted_fields_and_commas_in_names(self):
        result = parse_roster_csv('"5","Smith, John"\n6,Doe, Jane\n7,"O""Neil"')
        assert result.athletes == [
            Athlete(5, "Smith, John"),
            Athlete(6, "Doe, Jane"),
            Athlete(7, 'O"Neil'),
        ]

    def test_whitespace_trimmed(self):
        result = parse_roster_csv("  8 ,   Eve  ")
        assert result.athletes == [Athlete(8, "Eve")]

    def test_line_errors(self):
        text = "\n".join([
            "1,Alice",
            "no comma here",
            "abc,Bob",
            "0,Zero",
            "2.5,Half",
            "3,",
            ",Nobody",
        ])
        result = parse_roster_csv(text)
        assert result.athletes == [Athlete(1, "Alice")]
        assert [(e.line, e.message) for e in result.errors] == [
            (2, "Missing comma separator (expected: bib,name)"),
            (3, 'Invalid bib "abc" - must be a number'),
            (4, "Bib 0 must be a positive integer"),
            (5, "Bib 2.5 must be a positive integer"),
            (6, "Empty name for bib 3"),
            (7, 'Invalid bib "" - must be a number'),
        ]

    def test_duplicate_bib_keeps_first(self):
        result = parse_roster_csv("1,Alice\n1,Alicia\n")
        assert result.athletes == [Athlete(1, "Alice")]
        assert result.errors == [RosterError(2, "Duplicate bib 1 within CSV (kept first occurrence)")]

    def test_only_newlines_split_lines(self):
        result = parse_roster_csv("1,Ann\x0bLee\n2,Bo\u2028Kim\r\nno comma")
        assert result.athletes == [Athlete(1, "Ann\x0bLee"), Athlete(2, "Bo\u2028Kim")]
        assert result.errors == [RosterError(3, "Missing comma separator (expected: bib,name)")]

    def test_empty(self):
        result = parse_roster_csv("")
        assert result.athletes == []
        assert result.errors == []

    def test_error_to_dict(self):
        assert RosterError(3, "oops").to_dict() == {"line": 3, "message": "oops"}


class TestMergeRoster:
    def setup_method(self):
        self.category = Category("cat1", "Freestyle", [Athlete(5, "Eve"), Athlete(2, "Bob")])

    def test_adds_new_and_sorts_by_bib(self):
        merged = merge_roster(self.category, parse_roster_csv("9,Ivy\n1,Ann"))
        assert merged.added == [Athlete(9, "Ivy"), Athlete(1, "Ann")]
        assert merged.skipped == []
        assert [a.bib for a in merged.athletes] == [1, 2, 5, 9]

    def test_existing_bibs_skipped(self):
        merged = merge_roster(self.category, parse_roster_csv("5,Someone Else\n7,Gus"))
        assert merged.added == [Athlete(7, "Gus")]
        assert merged.skipped == [5]
        assert self.category.get_athlete(5).name == "Eve"

    def test_repeated_bib_in_import_added_once(self):
        imported = RosterImport(athletes=[Athlete(8, "Hal"), Athlete(8, "Hank")])
        merged = merge_roster(self.category, imported)
        assert merged.added == [Athlete(8, "Hal")]

    def test_nothing_added_keeps_order(self):
        merged = merge_roster(self.category, parse_roster_csv("2,Bob"))
        assert merged.athletes == [Athlete(5, "Eve"), Athlete(2, "Bob")]

    def test_category_not_modified(self):
        merge_roster(self.category, parse_roster_csv("3,Cy"))
        assert [a.bib for a in self.category.athletes] == [5, 2]
