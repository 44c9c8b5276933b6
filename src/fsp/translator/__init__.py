"""FSP Translator module - Maps engine verdicts to store pushdown clauses."""

from fsp.translator.planner import (
    FilterClause,
    OrderClause,
    PageBounds,
    PushdownPlan,
    PushdownPlanner,
    Residual,
    plan_pushdown,
)

__all__ = [
    "FilterClause",
    "OrderClause",
    "PageBounds",
    "PushdownPlan",
    "PushdownPlanner",
    "Residual",
    "plan_pushdown",
]
