"""
FSP Pushdown Planner - Translates engine verdicts into store-query clauses.

This module does not write SQL. It hands the store-query builder exactly
the parts the engines classified as cheap, and records which parts are
left to run in memory.

Translation Map:
    cheap filter groups → FilterClause   (WHERE column IN (...) [AND NOT IN (...)])
    active sort         → OrderClause    (ORDER BY column ASC|DESC)
    cheap page          → PageBounds     (1-based lower/upper row bounds)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from fsp.engine import FilterEngine, PageEngine, SortEngine
from fsp.parameters import SortDirection


class Residual(Enum):
    """Operations that still run in memory after pushdown."""
    FILTER = "filter"
    SORT = "sort"
    PAGE = "page"


@dataclass
class FilterClause:
    """
    One cheap filter group: `column IN (matches) AND column NOT IN (excludes)`.

    `matches` holds the include values, which are ORed. `excludes` is only
    non-empty if the group gained an exclude after it was bucketed as
    cheap; `including` is False in that case.
    """
    field: str
    column: Optional[str]
    matches: list[Any] = field(default_factory=list)
    including: bool = True
    single: bool = True
    excludes: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "column": self.column,
            "matches": list(self.matches),
            "excludes": list(self.excludes),
            "including": self.including,
            "single": self.single,
        }


@dataclass
class OrderClause:
    """A single ORDER BY key."""
    column: Optional[str]
    direction: SortDirection = SortDirection.ASCENDING
    nulls_first: bool = False

    def to_dict(self) -> dict:
        return {
            "column": self.column,
            "direction": self.direction.name,
            "nulls_first": self.nulls_first,
        }


@dataclass
class PageBounds:
    """1-based store bounds; None means the bound is not needed."""
    lower: Optional[int] = None
    upper: Optional[int] = None

    def to_dict(self) -> dict:
        return {"lower": self.lower, "upper": self.upper}


@dataclass
class PushdownPlan:
    """
    Everything the store-query builder needs for one request.

    Contains only cheap work; `residual` lists what the caller still has
    to run in memory via the engines.
    """
    filters: list[FilterClause] = field(default_factory=list)
    order: list[OrderClause] = field(default_factory=list)
    page: PageBounds = field(default_factory=PageBounds)
    residual: list[Residual] = field(default_factory=list)

    @property
    def in_memory(self) -> bool:
        return len(self.residual) > 0

    def to_dict(self) -> dict:
        return {
            "filters": [clause.to_dict() for clause in self.filters],
            "order": [clause.to_dict() for clause in self.order],
            "page": self.page.to_dict(),
            "residual": [r.value for r in self.residual],
        }


class PushdownPlanner:
    """
    Builds a PushdownPlan from the three engines of a request.

    | Engine verdict | Plan content |
    |----------------|--------------|
    | cheap filter groups | one FilterClause each |
    | any expensive filter group | Residual.FILTER |
    | sort active (cheap, non-empty) | one OrderClause per key |
    | sort not cheap | Residual.SORT, no ORDER BY |
    | page cheap | PageBounds from the page engine |
    | page expensive and requested | Residual.PAGE, empty bounds |
    """

    def plan(
        self,
        filter_engine: Optional[FilterEngine] = None,
        sort_engine: Optional[SortEngine] = None,
        page_engine: Optional[PageEngine] = None,
    ) -> PushdownPlan:
        plan = PushdownPlan()

        if filter_engine is not None:
            self._plan_filters(filter_engine, plan)
        if sort_engine is not None:
            self._plan_sort(sort_engine, plan)
        if page_engine is not None:
            self._plan_page(page_engine, plan)

        return plan

    def _plan_filters(self, filter_engine: FilterEngine, plan: PushdownPlan) -> None:
        for group in filter_engine.cheap_groups():
            plan.filters.append(FilterClause(
                field=group.field_name,
                column=group.column,
                matches=group.includes,
                excludes=group.excludes,
                including=group.including,
                single=group.single,
            ))

        if filter_engine.is_expensive():
            plan.residual.append(Residual.FILTER)

    def _plan_sort(self, sort_engine: SortEngine, plan: PushdownPlan) -> None:
        if sort_engine.is_active():
            for criterion in sort_engine.criteria():
                plan.order.append(OrderClause(
                    column=criterion.column,
                    direction=SortDirection.DESCENDING if criterion.descending
                    else SortDirection.ASCENDING,
                    nulls_first=criterion.nulls_first,
                ))
        elif not sort_engine.is_cheap():
            plan.residual.append(Residual.SORT)

    def _plan_page(self, page_engine: PageEngine, plan: PushdownPlan) -> None:
        if page_engine.is_cheap():
            plan.page = PageBounds(
                lower=page_engine.lower_bound(),
                upper=page_engine.upper_bound(),
            )
        elif page_engine.start is not None:
            plan.residual.append(Residual.PAGE)


def plan_pushdown(
    filter_engine: Optional[FilterEngine] = None,
    sort_engine: Optional[SortEngine] = None,
    page_engine: Optional[PageEngine] = None,
) -> PushdownPlan:
    """
    Convenience function to create a pushdown plan.

    Returns:
        PushdownPlan with the cheap clauses and the in-memory residue
    """
    planner = PushdownPlanner()
    return planner.plan(filter_engine, sort_engine, page_engine)
