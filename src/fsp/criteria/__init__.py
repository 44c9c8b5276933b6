# -*- encoding: utf-8 -*-
"""
Criteria for FSP.

Factories turn filter and sort parameters into one-shot criteria that
carry their cost, their pushdown column and an in-memory evaluator.
"""

from fsp.criteria.base import (
    FilterCriterion,
    SortCriterion,
    FilterCriteriaFactory,
    SortCriteriaFactory,
    StringMatchType,
    compare_equality,
    compare_identity,
)
from fsp.criteria.filtering import (
    BooleanFilterFactory,
    IntegerFilterFactory,
    LongFilterFactory,
    StringFilterFactory,
    StringsFilterFactory,
    parse_nullable_boolean,
    parse_nullable_integer,
)
from fsp.criteria.sorting import (
    SortFactory,
    DateSortFactory,
)

__all__ = [
    # Criteria
    "FilterCriterion",
    "SortCriterion",
    "FilterCriteriaFactory",
    "SortCriteriaFactory",
    "StringMatchType",
    "compare_equality",
    "compare_identity",
    # Filter factories
    "BooleanFilterFactory",
    "IntegerFilterFactory",
    "LongFilterFactory",
    "StringFilterFactory",
    "StringsFilterFactory",
    "parse_nullable_boolean",
    "parse_nullable_integer",
    # Sort factories
    "SortFactory",
    "DateSortFactory",
]
