# -*- encoding: utf-8 -*-
"""
Filter, sort and page engines.

Each engine classifies its part of a request as cheap (pushed down into
the backing store) or expensive (run in memory), and runs the expensive
part over the elements the store returned.
"""

from fsp.engine.filter_engine import (
    FilterEngine,
    CriterionGroup,
)
from fsp.engine.sort_engine import (
    SortEngine,
    compound,
)
from fsp.engine.page_engine import (
    PageEngine,
    derive_cost,
)

__all__ = [
    "FilterEngine",
    "CriterionGroup",
    "SortEngine",
    "compound",
    "PageEngine",
    "derive_cost",
]
