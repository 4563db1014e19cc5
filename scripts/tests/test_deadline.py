"""
Tests for deadline translation and the Deadline variant
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from todostack_lib.deadline import Deadline, translate, is_before, DAY, WEEK, MONTH, YEAR


class TestTranslate:
    """Test suite for translate()"""

    def test_days(self):
        """Test days translate to multiples of 86400 seconds"""
        assert translate("3d") == 3 * 86400

    def test_weeks(self):
        """Test weeks are seven days"""
        assert translate("2w") == 2 * 7 * 86400

    def test_months_and_years(self):
        """Test months are 30 days and years 12 months"""
        assert translate("1m") == MONTH == 30 * DAY
        assert translate("2y") == 2 * YEAR == 2 * 12 * 30 * DAY

    def test_leading_plus(self):
        """Test a leading plus sign is ignored"""
        assert translate("+5d") == translate("5d")

    def test_unknown_unit_counts_seconds(self):
        """Test an unknown unit character falls back to seconds"""
        assert translate("90s") == 90
        assert translate("7x") == 7

    def test_no_unit_counts_seconds(self):
        """Test a bare number is a number of seconds"""
        assert translate("45") == 45

    def test_uppercase_unit(self):
        """Test units are case-insensitive"""
        assert translate("1W") == WEEK

    @pytest.mark.parametrize("text", ["abc", "", None, "d3", "tomorrow"])
    def test_no_digits(self, text):
        """Test text without a leading number is not a duration"""
        assert translate(text) is None


class TestIsBefore:
    """Test suite for is_before()"""

    def test_ordering(self):
        """Test plain comparison"""
        assert is_before(1, 2) is True
        assert is_before(2, 1) is False
        assert is_before(2, 2) is False

    def test_absent_operands(self):
        """Test None on either side is never before"""
        assert is_before(None, 5) is False
        assert is_before(5, None) is False
        assert is_before(None, None) is False


class TestDeadline:
    """Test suite for the Deadline variant"""

    def test_kinds(self):
        """Test constructors set the kind"""
        assert Deadline.absent().is_absent
        assert Deadline.at(100).timestamp == 100
        assert Deadline.label("someday").timestamp is None
        assert not Deadline.label("someday").is_absent

    def test_json_shapes(self):
        """Test each kind maps to null, number or string"""
        assert Deadline.absent().to_json() is None
        assert Deadline.at(12.5).to_json() == 12.5
        assert Deadline.label("soon").to_json() == "soon"

    def test_from_json(self):
        """Test JSON values map back to kinds"""
        assert Deadline.from_json(None) == Deadline.absent()
        assert Deadline.from_json(42) == Deadline.at(42)
        assert Deadline.from_json("soon") == Deadline.label("soon")
        assert Deadline.from_json(True) == Deadline.label("True")
