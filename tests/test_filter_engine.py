# -*- encoding: utf-8 -*-
"""
Tests for the filter engine.

Covers cheap/expensive bucketing of criterion groups, OR within a group,
AND across groups, exclusion and the shape of filter() results.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from fsp.criteria import (
    BooleanFilterFactory,
    IntegerFilterFactory,
    StringFilterFactory,
    StringMatchType,
)
from fsp.engine import CriterionGroup, FilterEngine
from fsp.exceptions import UnknownFieldError
from fsp.parameters import Cost, FieldParameter


@dataclass
class Item:
    name: Optional[str] = None
    quantity: Optional[int] = None
    active: Optional[bool] = None


def quantity_factories(column=None):
    return {"quantity": IntegerFilterFactory(lambda n: n, column=column)}


# =============================================================================
# Classification Tests
# =============================================================================


class TestClassification:
    """Tests for bucketing groups as cheap or expensive."""

    def test_no_parameters(self):
        """Test that an empty engine is neither cheap nor expensive."""
        engine = FilterEngine()

        assert engine.is_cheap() is False
        assert engine.is_expensive() is False
        assert engine.cheap_groups() == []
        assert engine.expensive_groups() == []

    def test_column_filter_is_cheap(self):
        """Test that a filter with a column is pushed down."""
        engine = FilterEngine([FieldParameter("quantity", "4")], quantity_factories("qty"))

        assert engine.is_cheap() is True
        assert engine.is_expensive() is False
        groups = engine.cheap_groups()
        assert len(groups) == 1
        assert groups[0].column == "qty"
        assert groups[0].match == 4

    def test_no_column_is_expensive(self):
        """Test that a filter without a column runs in memory."""
        engine = FilterEngine([FieldParameter("quantity", "4")], quantity_factories())

        assert engine.is_expensive() is True
        assert engine.is_cheap() is False

    def test_exclusion_is_expensive(self):
        """Test that excluding criteria are always expensive."""
        engine = FilterEngine([FieldParameter("-quantity", "4")], quantity_factories("qty"))

        assert engine.is_expensive() is True
        assert engine.cheap_groups() == []

    def test_engine_cost_forces_expensive(self):
        """Test that an EXPENSIVE engine keeps every filter in memory."""
        engine = FilterEngine(
            [FieldParameter("quantity", "4")], quantity_factories("qty"), cost=Cost.EXPENSIVE
        )

        assert engine.is_expensive() is True
        assert engine.is_cheap() is False

    def test_bucket_fixed_by_first_criterion(self):
        """Test that a group stays in the bucket of its first criterion."""
        engine = FilterEngine(
            [FieldParameter("quantity", "4"), FieldParameter("-quantity", "14")],
            quantity_factories("qty"),
        )

        assert engine.is_cheap() is True
        assert engine.is_expensive() is False
        group = engine.cheap_groups()[0]
        assert group.expensive is True
        assert group.single is False
        assert group.including is False

    def test_mixed_fields(self):
        """Test that different fields are bucketed independently."""
        factories = {
            "quantity": IntegerFilterFactory(lambda i: i.quantity, column="qty"),
            "name": StringFilterFactory(StringMatchType.CASE_SENSITIVE_EXACT, lambda i: i.name),
        }
        engine = FilterEngine(
            [FieldParameter("quantity", "4"), FieldParameter("name", "Joe")], factories
        )

        assert engine.is_cheap() is True
        assert engine.is_expensive() is True
        assert [g.field_name for g in engine.cheap_groups()] == ["quantity"]
        assert [g.field_name for g in engine.expensive_groups()] == ["name"]

    def test_unknown_field(self):
        """Test that a parameter without a factory is rejected."""
        with pytest.raises(UnknownFieldError) as excinfo:
            FilterEngine([FieldParameter("bogus", "1")], quantity_factories())

        assert excinfo.value.field_name == "bogus"
        assert "bogus" in str(excinfo.value)

    def test_add_directly(self):
        """Test adding a prebuilt criterion."""
        engine = FilterEngine()
        criterion = IntegerFilterFactory(lambda n: n).build(FieldParameter("quantity", "4"))

        engine.add("quantity", criterion)

        assert engine.is_expensive() is True
        assert engine.filter([3, 4, 5]) == [4]


# =============================================================================
# Group Tests
# =============================================================================


class TestCriterionGroup:
    """Tests for the per-field predicate composition."""

    def build(self, raw_name, value):
        return IntegerFilterFactory(lambda n: n).build(FieldParameter(raw_name, value))

    def test_single_include(self):
        """Test a group with one include."""
        group = CriterionGroup("quantity", self.build("quantity", "4"))

        assert group.single is True
        assert group.including is True
        assert group.predicate()(4) is True
        assert group.predicate()(5) is False

    def test_includes_are_ored(self):
        """Test that includes on the same field are ORed."""
        group = CriterionGroup("quantity", self.build("quantity", "4"))
        group.add(self.build("quantity", "14"))
        predicate = group.predicate()

        assert predicate(4) and predicate(14)
        assert not predicate(5)
        assert [m for _, m, _ in group.matches] == [4, 14]

    def test_includes_and_excludes_split(self):
        """Test that match values are split by inclusion, in order."""
        group = CriterionGroup("quantity", self.build("quantity", "4"))
        group.add(self.build("-quantity", "14"))
        group.add(self.build("quantity", "24"))

        assert group.includes == [4, 24]
        assert group.excludes == [14]
        assert group.including is False

    def test_only_excludes(self):
        """Test that a group of excludes accepts everything else."""
        group = CriterionGroup("quantity", self.build("-quantity", "4"))
        group.add(self.build("-quantity", "5"))
        predicate = group.predicate()

        assert predicate(6) is True
        assert predicate(4) is False
        assert predicate(5) is False

    def test_include_and_exclude(self):
        """Test include AND NOT exclude."""
        group = CriterionGroup(
            "name",
            StringFilterFactory(StringMatchType.CASE_INSENSITIVE_PARTIAL, lambda s: s).build(
                FieldParameter("name", "joe")),
        )
        group.add(
            StringFilterFactory(StringMatchType.CASE_SENSITIVE_EXACT, lambda s: s).build(
                FieldParameter("-name", "Joe Bob")))
        predicate = group.predicate()

        assert predicate("Joe") is True
        assert predicate("Joe Bob") is False
        assert predicate("Jim") is False


# =============================================================================
# In-memory Filter Tests
# =============================================================================


class TestFilter:
    """Tests for running expensive filters over elements."""

    def test_basic_filter(self):
        """Test a single integer filter."""
        elements = [0, 100, 4, 14, 1024, -4]
        engine = FilterEngine([FieldParameter("quantity", "4")], quantity_factories())

        assert engine.filter(elements) == [4]

    def test_or_filter(self):
        """Test two values of one field."""
        elements = [0, 100, 4, 14, 1024, -4]
        engine = FilterEngine(
            [FieldParameter("quantity", "4"), FieldParameter("quantity", "14")],
            quantity_factories(),
        )

        assert engine.filter(elements) == [4, 14]
        assert engine.filter([0, 4, 14, 24]) == [4, 14]

    def test_exclude_keeps_missing_values(self):
        """Test that an exclude accepts elements without the value."""
        engine = FilterEngine([FieldParameter("-quantity", "4")], quantity_factories())

        assert engine.filter([None, 4, 5, 4]) == [None, 5]

    def test_partial_case_insensitive_or(self):
        """Test ORed partial, case-insensitive string matches."""
        factories = {
            "name": StringFilterFactory(StringMatchType.CASE_INSENSITIVE_PARTIAL, lambda s: s)
        }
        engine = FilterEngine(
            [FieldParameter("name", "Joe"), FieldParameter("name", "jim")], factories
        )

        result = engine.filter(["Joe", "Joe Bob", "Joe3", "Jim", "Bob"])

        assert len(result) == 4
        assert result[-1] == "Jim"
        assert "Bob" not in result

    def test_boolean_include(self):
        """Test a boolean include filter."""
        factories = {"value": BooleanFilterFactory(lambda b: b)}
        engine = FilterEngine([FieldParameter("value", "true")], factories)

        assert engine.filter([True, False, None, True]) == [True, True]

    def test_boolean_exclude(self):
        """Test a boolean exclude filter keeps None values."""
        factories = {"value": BooleanFilterFactory(lambda b: b)}
        engine = FilterEngine([FieldParameter("-value", "true")], factories)

        assert engine.filter([True, False, None, True]) == [False, None]

    def test_groups_are_anded(self):
        """Test that different fields must all match."""
        items = [
            Item("Joe", 4, True),
            Item("Joe", 4, False),
            Item("Jim", 4, True),
            Item("Joe", 5, True),
        ]
        factories = {
            "name": StringFilterFactory(StringMatchType.CASE_SENSITIVE_EXACT, lambda i: i.name),
            "quantity": IntegerFilterFactory(lambda i: i.quantity),
            "active": BooleanFilterFactory(lambda i: i.active),
        }
        engine = FilterEngine(
            [
                FieldParameter("name", "Joe"),
                FieldParameter("quantity", "4"),
                FieldParameter("active", "yes"),
            ],
            factories,
        )

        assert engine.filter(items) == [items[0]]

    def test_cheap_only_returns_input(self):
        """Test that nothing happens when every filter is pushed down."""
        elements = [0, 4, 14]
        engine = FilterEngine([FieldParameter("quantity", "4")], quantity_factories("qty"))

        assert engine.filter(elements) is elements

    def test_cheap_groups_not_evaluated(self):
        """Test that only expensive groups run in memory."""
        items = [Item("Joe", 4), Item("Jim", 5)]
        factories = {
            "quantity": IntegerFilterFactory(lambda i: i.quantity, column="qty"),
            "name": StringFilterFactory(StringMatchType.CASE_SENSITIVE_EXACT, lambda i: i.name),
        }
        engine = FilterEngine(
            [FieldParameter("quantity", "5"), FieldParameter("name", "Joe")], factories
        )

        # quantity=5 is the store's job
        assert engine.filter(items) == [items[0]]

    def test_lazy_input_stays_lazy(self):
        """Test that a one-pass iterable yields a lazy iterator."""
        engine = FilterEngine([FieldParameter("quantity", "4")], quantity_factories())
        source = iter([4, 5, 4])

        result = engine.filter(source)

        assert not isinstance(result, list)
        assert next(result) == 4
        assert list(result) == [4]

    def test_tuple_input_returns_list(self):
        """Test that collection input gives a list."""
        engine = FilterEngine([FieldParameter("quantity", "4")], quantity_factories())

        assert engine.filter((4, 5)) == [4]

    def test_thousands_of_includes_on_one_field(self):
        """Test that a large include list on one field evaluates without deep nesting."""
        engine = FilterEngine(
            [FieldParameter("id", str(i)) for i in range(3000)],
            {"id": IntegerFilterFactory(lambda n: n)},
        )

        assert len(engine.expensive_groups()[0].matches) == 3000
        assert engine.filter([5, 2999, 5000]) == [5, 2999]

    def test_thousands_of_excludes_on_one_field(self):
        """Test that a large exclude list on one field evaluates without deep nesting."""
        engine = FilterEngine(
            [FieldParameter("-id", str(i)) for i in range(3000)],
            {"id": IntegerFilterFactory(lambda n: n)},
        )

        assert engine.filter([5, 2999, 5000, None]) == [5000, None]
