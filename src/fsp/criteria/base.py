# -*- encoding: utf-8 -*-
"""
Criteria and criterion factories.

A criterion is a one-shot record built from a single parameter. It knows:
- Its cost (cheap when it has a store column to push down to)
- The column identifier used by the store-query builder
- How to evaluate (filter) or order (sort) elements in memory

Factories are registered per field name and turn parameters into criteria.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from fsp.parameters import Cost, FieldParameter, SortParameter


T = TypeVar("T")

# Extracts the comparison value from a domain element.
Adapter = Callable[[Any], Any]
Predicate = Callable[[Any], bool]
Comparator = Callable[[Any, Any], int]


class StringMatchType(Enum):
    """Types of string matching."""
    CASE_SENSITIVE_EXACT = "case_sensitive_exact"
    CASE_INSENSITIVE_EXACT = "case_insensitive_exact"
    CASE_SENSITIVE_PARTIAL = "case_sensitive_partial"
    CASE_INSENSITIVE_PARTIAL = "case_insensitive_partial"


def compare_equality(left: Any, right: Any) -> int:
    """
    Compare two values null-safe, using equality.

    None sorts before every other value; two Nones are equal.
    """
    if left is None:
        return 0 if right is None else -1
    if right is None:
        return 1
    if left == right:
        return 0
    return -1 if left < right else 1


def compare_identity(left: Any, right: Any) -> int:
    """Compare two values null-safe, short-circuiting on identity."""
    if left is right:
        return 0
    if left is None:
        # right can't be None here, the identity check would have caught it
        return -1
    if right is None:
        return 1
    return compare_equality(left, right)


@dataclass(frozen=True)
class FilterCriterion(Generic[T]):
    """
    A single field-level filter rule.

    Attributes:
        cost: CHEAP if it can be pushed into the store query
        including: False if matching elements are to be excluded
        column: Store column to filter on, None when there is none
        match: Parsed match value (None means "matches nothing" for typed filters)
        predicate: In-memory match function over domain elements
    """
    cost: Cost
    including: bool
    column: Optional[str]
    match: Any
    predicate: Predicate
    kind: str = ""

    @property
    def expensive(self) -> bool:
        return self.cost is Cost.EXPENSIVE

    def evaluate(self, element: T) -> bool:
        return self.predicate(element)

    def __repr__(self) -> str:
        return (
            f"{self.kind}FilterCriterion(match={self.match!r}, "
            f"column={self.column}, including={self.including})"
        )


@dataclass(frozen=True)
class SortCriterion(Generic[T]):
    """
    A single sort key.

    Attributes:
        cost: CHEAP if the store can order by it
        column: Store column to order by, None when there is none
        descending: Reverse the natural order of the adapted values
        nulls_first: Place None values before all others, independent of direction
        key: Adapter returning the value to compare
        compare_values: Natural comparison of two adapted, non-None values
    """
    cost: Cost
    column: Optional[str]
    descending: bool
    nulls_first: bool
    key: Adapter
    compare_values: Comparator = compare_equality

    @property
    def expensive(self) -> bool:
        return self.cost is Cost.EXPENSIVE

    def value_of(self, element: T) -> Any:
        if element is None:
            return None
        return self.key(element)

    def compare(self, left: T, right: T) -> int:
        """Natural order of the adapted values, None as the minimum."""
        a = self.value_of(left)
        b = self.value_of(right)
        if a is None or b is None:
            return compare_equality(a, b)
        return self.compare_values(a, b)

    def ordering(self) -> Comparator:
        """
        Comparator with this criterion's direction and null placement applied.

        Direction reverses only the non-null values; None values stay in
        front (nulls_first) or at the back regardless of direction.
        """
        null_sign = -1 if self.nulls_first else 1
        direction_sign = -1 if self.descending else 1

        def _compare(left: T, right: T) -> int:
            a = self.value_of(left)
            b = self.value_of(right)
            if a is None and b is None:
                return 0
            if a is None:
                return null_sign
            if b is None:
                return -null_sign
            return direction_sign * self.compare_values(a, b)

        return _compare

    def __repr__(self) -> str:
        return (
            f"SortCriterion(column={self.column}, descending={self.descending}, "
            f"nulls_first={self.nulls_first})"
        )


class FilterCriteriaFactory(ABC):
    """
    Abstract base for filter factories.

    A factory without a column only produces EXPENSIVE criteria, since
    there is nothing to push down.
    """

    def __init__(self, adapter: Adapter, column: Optional[str] = None):
        self.adapter = adapter
        self.column = column

    @property
    def cost(self) -> Cost:
        return Cost.CHEAP if self.column is not None else Cost.EXPENSIVE

    @abstractmethod
    def build(self, parameter: FieldParameter) -> FilterCriterion:
        """Build a fresh criterion for one filter parameter."""
        ...


class SortCriteriaFactory(ABC):
    """Abstract base for sort factories."""

    def __init__(self, nulls_first: bool, adapter: Adapter, column: Optional[str] = None):
        self.nulls_first = nulls_first
        self.adapter = adapter
        self.column = column

    @property
    def cost(self) -> Cost:
        return Cost.CHEAP if self.column is not None else Cost.EXPENSIVE

    @abstractmethod
    def build(self, parameter: SortParameter) -> SortCriterion:
        """Build a fresh criterion for one sort parameter."""
        ...
