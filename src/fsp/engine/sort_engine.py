# -*- encoding: utf-8 -*-
"""
Sort Engine - decides whether a sort runs in the store or in memory.

Sorts are not commutative and mixing store-side and in-memory keys is
messy, so a single expensive key makes the whole sort expensive.
"""

import logging
from collections.abc import Collection
from functools import cmp_to_key
from typing import Any, Iterable, Mapping, Optional, Sequence

from fsp.criteria.base import Comparator, SortCriteriaFactory, SortCriterion
from fsp.exceptions import UnknownFieldError
from fsp.parameters import Cost, SortParameter

logger = logging.getLogger(__name__)


def compound(orderings: Sequence[Comparator]) -> Comparator:
    """Lexicographic composition: later orderings only break ties."""

    def _compare(left: Any, right: Any) -> int:
        for ordering in orderings:
            result = ordering(left, right)
            if result != 0:
                return result
        return 0

    return _compare


class SortEngine:
    """
    Collect sort keys in priority order and sort in memory when needed.

    Example:
        >>> factories = {"total": SortFactory(False, lambda o: o["total"])}
        >>> engine = SortEngine([SortParameter("total", SortDirection.DESCENDING)], factories)
        >>> engine.is_cheap()
        False
        >>> engine.sort([{"total": 1}, {"total": 3}])
        [{'total': 3}, {'total': 1}]
    """

    def __init__(
        self,
        parameters: Optional[Sequence[SortParameter]] = None,
        factories: Optional[Mapping[str, SortCriteriaFactory]] = None,
        cost: Cost = Cost.CHEAP,
    ):
        """
        Build a criterion for every sort parameter.

        Args:
            parameters: Sort keys, primary key first
            factories: Map of known field names to sort factories
            cost: EXPENSIVE forces the sort into memory

        Raises:
            UnknownFieldError: If a parameter names a field with no factory
        """
        self.cost = cost
        self._criteria: list[SortCriterion] = []

        factories = factories or {}
        for parameter in parameters or ():
            factory = factories.get(parameter.field_name)
            if factory is None:
                raise UnknownFieldError(parameter.field_name, "sorting")
            self.add(factory.build(parameter))

    def add(self, criterion: SortCriterion) -> None:
        self._criteria.append(criterion)
        logger.debug("Sort key #%d added (%r)", len(self._criteria), criterion)

    def criteria(self) -> tuple[SortCriterion, ...]:
        return tuple(self._criteria)

    def is_cheap(self) -> bool:
        """True if the whole sort can be done by the store (or there is nothing to sort)."""
        if self.cost is Cost.EXPENSIVE:
            return False
        return not any(criterion.expensive for criterion in self._criteria)

    def is_active(self) -> bool:
        """True if the store should apply an ORDER BY."""
        return self.is_cheap() and len(self._criteria) > 0

    def comparator(self) -> Comparator:
        return compound([criterion.ordering() for criterion in self._criteria])

    def sort(self, elements: Iterable[Any]) -> Iterable[Any]:
        """
        Sort elements in memory unless the store already did.

        The sort is stable: elements equal on every key keep their input
        order, which keeps pagination deterministic.

        Returns:
            elements itself when cheap; otherwise a sorted list for
            collection input and an iterator over the sorted elements for
            iterable input.
        """
        if self.is_cheap():
            return elements

        logger.debug("Sorting in memory by %d key(s)", len(self._criteria))
        ordered = sorted(elements, key=cmp_to_key(self.comparator()))
        if isinstance(elements, Collection):
            return ordered
        return iter(ordered)

    def __repr__(self) -> str:
        return f"SortEngine(cost={self.cost.value}, criteria={self._criteria!r})"
