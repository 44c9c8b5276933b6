"""
FSP - Filter / Sort / Page main API.

This module provides the high-level interface for one entity type: it
holds the registered criteria factories and, per request, builds the
three engines, the pushdown plan for the store and the in-memory pass
over whatever the store returns.

Usage:
    from fsp import FSP

    fsp = FSP(
        filter_factories={"status": StringFilterFactory(
            StringMatchType.CASE_INSENSITIVE_EXACT, lambda t: t.status, column="status")},
        sort_factories={"created": DateSortFactory(False, lambda t: t.created)},
    )

    request = fsp.request("WHERE status = open ORDER BY created DESC LIMIT 20")
    rows = store.select(request.plan())    # cheap part, done by the caller
    tickets = request.apply(rows)          # expensive part, in memory
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

from fsp.config import FSPConfig
from fsp.criteria import FilterCriteriaFactory, SortCriteriaFactory
from fsp.engine import FilterEngine, PageEngine, SortEngine
from fsp.parameters import FSPQuery
from fsp.parser import FSPParser
from fsp.translator import PushdownPlan, PushdownPlanner

logger = logging.getLogger(__name__)


@dataclass
class FSPResult:
    """
    Result of running a request end to end.

    Provides the final elements together with the plan that was pushed down.
    """
    items: list = field(default_factory=list)
    plan: PushdownPlan = field(default_factory=PushdownPlan)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return len(self.items) > 0

    @property
    def first(self) -> Optional[Any]:
        """Get the first element, or None if empty."""
        return self.items[0] if self.items else None


class FSPRequest:
    """
    The engines for one request.

    Built by FSP.request(); used once and then discarded.
    """

    def __init__(
        self,
        query: FSPQuery,
        filter_engine: FilterEngine,
        sort_engine: SortEngine,
        page_engine: PageEngine,
    ):
        self.query = query
        self.filter_engine = filter_engine
        self.sort_engine = sort_engine
        self.page_engine = page_engine
        self._planner = PushdownPlanner()

    def plan(self) -> PushdownPlan:
        """Clauses the store-query builder should apply."""
        return self._planner.plan(self.filter_engine, self.sort_engine, self.page_engine)

    def apply(self, elements: Iterable[Any]) -> Iterable[Any]:
        """
        Run the in-memory part over elements already narrowed by the store.

        Filters first, then sorts, then pages. Collection input gives a
        collection back, a one-pass iterable stays lazy where the engines
        allow it (sorting has to consume its input).
        """
        filtered = self.filter_engine.filter(elements)
        ordered = self.sort_engine.sort(filtered)
        return self.page_engine.page(ordered)

    def explain(self) -> dict:
        """
        Explain where each part of the request runs.

        Returns:
            Explanation dict with the pushdown plan and the in-memory work
        """
        return {
            "filters": {
                "cheap": [g.field_name for g in self.filter_engine.cheap_groups()],
                "expensive": [g.field_name for g in self.filter_engine.expensive_groups()],
            },
            "sort": {
                "cheap": self.sort_engine.is_cheap(),
                "keys": [repr(c) for c in self.sort_engine.criteria()],
            },
            "page": {
                "start": self.page_engine.start,
                "limit": self.page_engine.limit,
                "cost": self.page_engine.cost.value,
            },
            "plan": self.plan().to_dict(),
        }


class FSP:
    """
    Filter/sort/page interface for one entity type.

    Factories are registered per (lower-case) field name. Any parameter
    naming another field is rejected with UnknownFieldError when the
    request is built.
    """

    def __init__(
        self,
        filter_factories: Optional[Mapping[str, FilterCriteriaFactory]] = None,
        sort_factories: Optional[Mapping[str, SortCriteriaFactory]] = None,
        config: Optional[FSPConfig] = None,
    ):
        """
        Initialize FSP with the known fields.

        Args:
            filter_factories: Map of field name to filter factory
            sort_factories: Map of field name to sort factory
            config: Engine cost settings, defaults to FSPConfig()
        """
        self._filter_factories: dict[str, FilterCriteriaFactory] = {}
        self._sort_factories: dict[str, SortCriteriaFactory] = {}
        self.config = config or FSPConfig()
        self._parser = FSPParser()

        for name, factory in (filter_factories or {}).items():
            self.register_filter(name, factory)
        for name, factory in (sort_factories or {}).items():
            self.register_sort(name, factory)

    def register_filter(self, field_name: str, factory: FilterCriteriaFactory) -> None:
        self._filter_factories[field_name.lower()] = factory

    def register_sort(self, field_name: str, factory: SortCriteriaFactory) -> None:
        self._sort_factories[field_name.lower()] = factory

    @property
    def filter_fields(self) -> list[str]:
        return sorted(self._filter_factories)

    @property
    def sort_fields(self) -> list[str]:
        return sorted(self._sort_factories)

    def parse(self, text: str) -> FSPQuery:
        """Parse an FSP clause expression."""
        return self._parser.parse(text)

    def request(self, query: Union[FSPQuery, str, None] = None) -> FSPRequest:
        """
        Build the engines for one request.

        Args:
            query: An FSPQuery, an FSP expression string, or None for
                "everything, unsorted, unpaged"

        Returns:
            FSPRequest with the classified engines

        Raises:
            ParameterParseError: If the expression is not valid syntax
            UnknownFieldError: If a filter or sort names an unknown field
        """
        if query is None:
            query = FSPQuery()
        elif isinstance(query, str):
            query = self.parse(query)

        filter_engine = FilterEngine(query.filters, self._filter_factories, self.config.filter_cost)
        sort_engine = SortEngine(query.sorts, self._sort_factories, self.config.sort_cost)
        page_engine = PageEngine(query.page, filter_engine, sort_engine, self.config.page_cost)

        logger.debug(
            "Request built: %d filter(s), %d sort key(s), page cost %s",
            len(query.filters), len(query.sorts), page_engine.cost.value,
        )
        return FSPRequest(query, filter_engine, sort_engine, page_engine)

    def query(
        self,
        query: Union[FSPQuery, str, None],
        fetch: Callable[[PushdownPlan], Iterable[Any]],
    ) -> FSPResult:
        """
        Run a request end to end.

        Args:
            query: An FSPQuery or FSP expression string
            fetch: Store access; receives the pushdown plan and returns
                the elements matching its cheap clauses

        Returns:
            FSPResult with the final elements and the plan used
        """
        request = self.request(query)
        plan = request.plan()
        items = list(request.apply(fetch(plan)))
        return FSPResult(items=items, plan=plan)
