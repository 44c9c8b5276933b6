# -*- encoding: utf-8 -*-
"""
Tests for FSP parameter types.

Covers sigil handling and normalization of filter parameters, sort
directions and page window defaults.
"""

import pytest

from fsp.exceptions import EmptyFieldNameError, InvalidPageParameterError
from fsp.parameters import (
    Cost,
    FieldParameter,
    PageParameter,
    SortDirection,
    SortParameter,
)


# =============================================================================
# FieldParameter Tests
# =============================================================================


class TestFieldParameter:
    """Tests for FieldParameter."""

    def test_plain_name_is_including(self):
        """Test that a name without sigil includes matches."""
        p = FieldParameter("quantity", "4")

        assert p.field_name == "quantity"
        assert p.raw_value == "4"
        assert p.including is True

    def test_plus_sigil_is_including(self):
        """Test the include sigil."""
        p = FieldParameter("+quantity", "4")

        assert p.field_name == "quantity"
        assert p.including is True

    def test_minus_sigil_is_excluding(self):
        """Test the exclude sigil."""
        p = FieldParameter("-quantity", "4")

        assert p.field_name == "quantity"
        assert p.including is False

    def test_name_is_lowercased(self):
        """Test that the name is lower-cased after the sigil is stripped."""
        assert FieldParameter("-Status", "x").field_name == "status"
        assert FieldParameter("OwnerName", "x").field_name == "ownername"

    def test_raw_value_may_be_none(self):
        """Test that a missing raw value is allowed."""
        assert FieldParameter("owner").raw_value is None

    @pytest.mark.parametrize("raw_name", ["", "+", "-", None])
    def test_empty_names_rejected(self, raw_name):
        """Test that empty names and lone sigils are rejected."""
        with pytest.raises(EmptyFieldNameError):
            FieldParameter(raw_name, "false")

    def test_empty_name_is_value_error(self):
        """Test that empty names are client-input errors."""
        with pytest.raises(ValueError):
            FieldParameter("+", "false")

    def test_equality(self):
        """Test equality over name, value and inclusion."""
        p1 = FieldParameter("value", "true")
        p2 = FieldParameter("value", "false")
        p3 = FieldParameter("+value", "true")
        p4 = FieldParameter("-value", "true")
        p5 = FieldParameter("value2", "false")

        assert p1 != p2
        assert p1 != p4
        assert p1 != p5
        assert p2 != p3
        assert p3 != p4
        assert p4 != p5

        # Default is 'inclusive'
        assert p1 == p3
        assert hash(p1) == hash(p3)

    def test_immutable(self):
        """Test that parameters cannot be changed after construction."""
        p = FieldParameter("value", "true")

        with pytest.raises(AttributeError):
            p.field_name = "other"


# =============================================================================
# SortParameter / SortDirection Tests
# =============================================================================


class TestSortParameter:
    """Tests for SortParameter and SortDirection."""

    def test_field_name_lowercased(self):
        """Test that sort field names are lower-cased."""
        p = SortParameter("Integer", SortDirection.DESCENDING)

        assert p.field_name == "integer"
        assert p.direction == SortDirection.DESCENDING
        assert p.descending is True

    def test_default_direction(self):
        """Test that the default direction is ascending."""
        p = SortParameter("name")

        assert p.direction == SortDirection.ASCENDING
        assert p.descending is False

    def test_direction_from_string(self):
        """Test that a status code is accepted as direction."""
        assert SortParameter("name", "D").direction == SortDirection.DESCENDING

    @pytest.mark.parametrize("value,expected", [
        ("A", SortDirection.ASCENDING),
        ("D", SortDirection.DESCENDING),
        ("d", SortDirection.DESCENDING),
        ("desc", SortDirection.DESCENDING),
        ("ASC", SortDirection.ASCENDING),
        ("X", SortDirection.ASCENDING),
        (None, SortDirection.ASCENDING),
    ])
    def test_parse(self, value, expected):
        """Test parsing directions from codes and words."""
        assert SortDirection.parse(value) == expected

    def test_str_is_status_code(self):
        """Test that a direction renders as its status code."""
        assert str(SortDirection.ASCENDING) == "A"
        assert SortDirection.DESCENDING.status == "D"


# =============================================================================
# PageParameter Tests
# =============================================================================


class TestPageParameter:
    """Tests for PageParameter."""

    def test_limit_without_start_starts_at_zero(self):
        """Test that a limit alone starts the window at 0."""
        p = PageParameter(limit=10)

        assert p.start == 0
        assert p.limit == 10
        assert p.requested is True

    def test_no_paging(self):
        """Test that no start and no limit means no paging."""
        p = PageParameter()

        assert p.start is None
        assert p.limit is None
        assert p.requested is False

    def test_start_without_limit(self):
        """Test an open-ended window."""
        p = PageParameter(5)

        assert p.start == 5
        assert p.limit is None

    @pytest.mark.parametrize("start,limit", [(-1, None), (0, -5), (None, -1)])
    def test_negative_values_rejected(self, start, limit):
        """Test that negative windows are rejected."""
        with pytest.raises(InvalidPageParameterError):
            PageParameter(start, limit)


# =============================================================================
# Cost Tests
# =============================================================================


class TestCost:
    """Tests for Cost parsing."""

    def test_parse(self):
        """Test case-insensitive parsing."""
        assert Cost.parse("cheap") is Cost.CHEAP
        assert Cost.parse(" EXPENSIVE ") is Cost.EXPENSIVE
        assert Cost.parse(Cost.CHEAP) is Cost.CHEAP

    def test_parse_invalid(self):
        """Test that unknown costs are rejected."""
        with pytest.raises(ValueError):
            Cost.parse("free")
