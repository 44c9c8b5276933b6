# -*- encoding: utf-8 -*-
"""
Filter Engine - classifies filter criteria and runs the in-memory part.

For every request a list of FieldParameters is registered with the engine,
which then works out whether each field's filter can be offloaded to the
store (cheap) or must run over the fetched elements (expensive):

1. Criteria sharing a field name are collected in a CriterionGroup
2. A group is bucketed once, when its first criterion arrives
3. Cheap groups are handed to the store-query builder
4. filter() only evaluates the expensive groups

Semantics of the in-memory filter:
- Within a group, includes are ORed and excludes are ORed
- A group accepts an element if (any include or no includes) and not any exclude
- Groups are ANDed
"""

import logging
import threading
from collections.abc import Collection
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from fsp.criteria.base import FilterCriteriaFactory, FilterCriterion, Predicate
from fsp.exceptions import UnknownFieldError
from fsp.parameters import Cost, FieldParameter

logger = logging.getLogger(__name__)


def _any_of(predicates: tuple) -> Predicate:
    """OR over a flat tuple of predicates; depth stays constant as it grows."""
    if len(predicates) == 1:
        return predicates[0]
    return lambda element: any(p(element) for p in predicates)


def is_expensive_criterion(criterion: FilterCriterion) -> bool:
    # Excludes are always expensive: the store query only knows IN (...),
    # which cannot express "everything but ...".
    return criterion.expensive or not criterion.including


class CriterionGroup:
    """
    All criteria registered for one field.

    The include and exclude sides each keep a flat tuple of member
    predicates and one already-ORed predicate over it, rebuilt on add(),
    so evaluation never nests deeper as the group grows.

    Attributes:
        field_name: Normalized field name
        column: Store column of the first criterion
        match: Match value of the first criterion
        matches: (index, match, including) for every criterion, in order
    """

    def __init__(self, field_name: str, criterion: FilterCriterion):
        self.field_name = field_name
        self.column = criterion.column
        self.match = criterion.match
        self.matches: list[tuple[int, Any, bool]] = []
        self.expensive = False
        self._include_predicates: tuple[Predicate, ...] = ()
        self._exclude_predicates: tuple[Predicate, ...] = ()
        self._include: Optional[Predicate] = None
        self._exclude: Optional[Predicate] = None
        self._lock = threading.RLock()

        self.add(criterion)

    def add(self, criterion: FilterCriterion) -> None:
        with self._lock:
            self.matches.append((len(self.matches), criterion.match, criterion.including))
            self.expensive = self.expensive or is_expensive_criterion(criterion)

            if criterion.including:
                self._include_predicates = self._include_predicates + (criterion.predicate,)
                self._include = _any_of(self._include_predicates)
            else:
                self._exclude_predicates = self._exclude_predicates + (criterion.predicate,)
                self._exclude = _any_of(self._exclude_predicates)

    @property
    def single(self) -> bool:
        return len(self.matches) == 1

    @property
    def including(self) -> bool:
        """True if every criterion in the group includes."""
        return all(including for _, _, including in self.matches)

    @property
    def includes(self) -> list[Any]:
        """Match values of the including criteria, in order."""
        return [match for _, match, including in self.matches if including]

    @property
    def excludes(self) -> list[Any]:
        """Match values of the excluding criteria, in order."""
        return [match for _, match, including in self.matches if not including]

    def predicate(self) -> Predicate:
        with self._lock:
            include = self._include
            exclude = self._exclude

        if include is None and exclude is None:
            return lambda element: True
        if exclude is None:
            return include
        if include is None:
            return lambda element: not exclude(element)
        return lambda element: include(element) and not exclude(element)

    def __repr__(self) -> str:
        return (
            f"CriterionGroup(field_name={self.field_name!r}, column={self.column}, "
            f"expensive={self.expensive}, matches={len(self.matches)})"
        )


class FilterEngine:
    """
    Decide which filters run in the store and run the rest in memory.

    Example:
        >>> factories = {"quantity": IntegerFilterFactory(lambda n: n)}
        >>> engine = FilterEngine([FieldParameter("quantity", "4")], factories)
        >>> engine.is_expensive()
        True
        >>> engine.filter([0, 4, 14])
        [4]

    Thread safety: add() and the cost flags are guarded by a per-engine
    lock. All add() calls must happen before filter() is used.
    """

    def __init__(
        self,
        parameters: Optional[Sequence[FieldParameter]] = None,
        factories: Optional[Mapping[str, FilterCriteriaFactory]] = None,
        cost: Cost = Cost.CHEAP,
    ):
        """
        Build criteria for every parameter and classify them.

        Args:
            parameters: Filter parameters for this request
            factories: Map of known field names to criteria factories
            cost: EXPENSIVE forces every filter into memory

        Raises:
            UnknownFieldError: If a parameter names a field with no factory
        """
        self.cost = cost
        self._cheap: dict[str, CriterionGroup] = {}
        self._expensive: dict[str, CriterionGroup] = {}
        self._has_cheap = False
        self._has_expensive = False
        self._lock = threading.RLock()

        factories = factories or {}
        for parameter in parameters or ():
            factory = factories.get(parameter.field_name)
            if factory is None:
                raise UnknownFieldError(parameter.field_name, "filtering")
            self.add(parameter.field_name, factory.build(parameter))

    def add(self, field_name: str, criterion: FilterCriterion) -> None:
        """
        Add a criterion to the group of its field.

        A new group is bucketed by this first criterion and stays in that
        bucket; later criteria only extend its predicates.
        """
        with self._lock:
            group = self._cheap.get(field_name) or self._expensive.get(field_name)
            if group is not None:
                group.add(criterion)
                return

            group = CriterionGroup(field_name, criterion)
            if self.cost is Cost.EXPENSIVE or group.expensive:
                self._expensive[field_name] = group
                self._has_expensive = True
                bucket = "expensive"
            else:
                self._cheap[field_name] = group
                self._has_cheap = True
                bucket = "cheap"

        logger.debug("Filter on '%s' classified %s (%r)", field_name, bucket, criterion)

    def is_expensive(self) -> bool:
        """True if at least one filter needs to run in memory."""
        with self._lock:
            return self._has_expensive

    def is_cheap(self) -> bool:
        """True if at least one filter can be executed by the store."""
        with self._lock:
            return self._has_cheap

    def cheap_groups(self) -> list[CriterionGroup]:
        """Groups the store-query builder should turn into WHERE clauses."""
        with self._lock:
            return list(self._cheap.values())

    def expensive_groups(self) -> list[CriterionGroup]:
        with self._lock:
            return list(self._expensive.values())

    def predicate(self) -> Predicate:
        """Conjunction of every expensive group's predicate."""
        predicates = [group.predicate() for group in self.expensive_groups()]
        return lambda element: all(p(element) for p in predicates)

    def filter(self, elements: Iterable[Any]) -> Iterable[Any]:
        """
        Run the expensive filters over elements.

        Assumes the cheap filters were already applied by the store.

        Args:
            elements: A collection or a one-pass iterable

        Returns:
            elements itself if nothing runs in memory; otherwise a list
            for collection input and a lazy iterator for iterable input.
        """
        if not self.is_expensive():
            return elements

        predicate = self.predicate()
        if isinstance(elements, Collection):
            return [element for element in elements if predicate(element)]
        return self._filter_lazily(elements, predicate)

    @staticmethod
    def _filter_lazily(elements: Iterable[Any], predicate: Predicate) -> Iterator[Any]:
        for element in elements:
            if predicate(element):
                yield element

    def __repr__(self) -> str:
        return (
            f"FilterEngine(cost={self.cost.value}, cheap={sorted(self._cheap)}, "
            f"expensive={sorted(self._expensive)})"
        )
