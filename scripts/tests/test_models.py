"""
Tests for todo item parsing
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from todostack_lib.deadline import Deadline, DAY
from todostack_lib.errors import ParseError
from todostack_lib.models import TodoItem, parse_item, parse_tags, make_identifier

NOW = 1_700_000_000.0


class TestParseItem:
    """Test suite for parse_item()"""

    def test_four_segments(self):
        """Test name, deadline, tags and description are split out"""
        item = parse_item("Write report\n3d\n[work, urgent]\nDraft first\nthen review", now=NOW)

        assert item.name == "Write report"
        assert item.deadline == Deadline.at(NOW + 3 * DAY)
        assert item.tags == ["work", "urgent"]
        assert item.desc == "Draft first\nthen review"

    def test_description_keeps_line_breaks(self):
        """Test only the first three line breaks split segments"""
        item = parse_item("A\n\n\nline 1\n\nline 3\n", now=NOW)
        assert item.desc == "line 1\n\nline 3\n"

    def test_missing_segments(self):
        """Test a bare name gives an empty item"""
        item = parse_item("Just a name", now=NOW)

        assert item.name == "Just a name"
        assert item.deadline.is_absent
        assert item.tags == []
        assert item.desc == ""

    def test_label_deadline(self):
        """Test a deadline that is not a duration is kept as a label"""
        item = parse_item("A\nafter the holidays\n", now=NOW)
        assert item.deadline == Deadline.label("after the holidays")

    def test_quoted_label_deadline(self):
        """Test a quoted string literal is unquoted"""
        item = parse_item('A\n"end of sprint"\n', now=NOW)
        assert item.deadline == Deadline.label("end of sprint")

    def test_deadline_out_of_range(self):
        """Test a duration past what a date can hold is rejected"""
        with pytest.raises(ParseError):
            parse_item("A\n100000y\n", now=NOW)
        with pytest.raises(ParseError):
            parse_item("A\n" + "9" * 400 + "d\n", now=NOW)

    def test_empty_name(self):
        """Test an empty name is rejected"""
        with pytest.raises(ParseError):
            parse_item("\n3d\n[]\ndesc", now=NOW)

    def test_malformed_tags(self):
        """Test a malformed tag list is a parse error"""
        with pytest.raises(ParseError):
            parse_item("A\n1d\n[work, \nx", now=NOW)

    def test_identifier_is_case_folded(self):
        """Test the identifier is the lower-cased name"""
        assert parse_item("Buy MILK", now=NOW).identifier == "buy milk"
        assert make_identifier("  Call Bob ") == "call bob"


class TestParseTags:
    """Test suite for parse_tags()"""

    def test_literal_list(self):
        """Test a list literal of strings and numbers"""
        assert parse_tags("['home', 'q3', 2024]") == ["home", "q3", "2024"]

    def test_bare_names_in_brackets(self):
        """Test unquoted names inside a literal list are labels"""
        assert parse_tags("[x]") == ["x"]
        assert parse_tags("[work, urgent]") == ["work", "urgent"]
        assert parse_tags("{home, 'q3', 7}") == ["home", "q3", "7"]

    def test_tuple_and_string(self):
        """Test tuple literals and single quoted strings"""
        assert parse_tags("('a', 'b')") == ["a", "b"]
        assert parse_tags("'solo'") == ["solo"]

    def test_bare_labels(self):
        """Test bare labels split on commas and whitespace"""
        assert parse_tags("work, home  errands") == ["work", "home", "errands"]

    def test_duplicates_dropped(self):
        """Test repeated labels appear once"""
        assert parse_tags("a b a") == ["a", "b"]

    def test_blank(self):
        """Test a blank segment means no tags"""
        assert parse_tags("   ") == []

    @pytest.mark.parametrize("text", ["{'k': 'v'}", "[['nested']]", "(1, None)", "[unclosed"])
    def test_rejected(self, text):
        """Test literals that are not lists of labels are rejected"""
        with pytest.raises(ParseError):
            parse_tags(text)


class TestTodoItemRecord:
    """Test suite for record (de)serialization"""

    def test_round_trip(self):
        """Test to_dict/from_dict preserve every field"""
        item = TodoItem(name="A", deadline=Deadline.label("soon"), tags=["x"], desc="d\ne")
        assert TodoItem.from_dict(item.to_dict()) == item

    def test_rejects_non_records(self):
        """Test data without a name is not a record"""
        with pytest.raises(ParseError):
            TodoItem.from_dict({"tags": []})
        with pytest.raises(ParseError):
            TodoItem.from_dict(["not", "a", "dict"])
