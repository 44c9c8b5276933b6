"""
FSP - Filter, Sort and Page pushdown engine

Decides, per request, which parts of filtering, sorting and paging can be
pushed down into the backing store (cheap) and which must run in
application memory (expensive), and runs the expensive parts.

Core Principles:
- Classify once, at build time: all input errors surface before any element is touched
- One expensive sort key makes the whole sort expensive
- In-memory paging only when filtering or sorting already runs in memory

Components:
- FSP: Main interface (factory registry, request building)
- fsp.engine: FilterEngine, SortEngine, PageEngine
- fsp.criteria: Criteria factories for booleans, integers, strings, dates
- fsp.translator: Pushdown plan for the store-query builder
- fsp.parser: Clause expression parser

Usage:
    from fsp import FSP

    fsp = FSP(filter_factories=..., sort_factories=...)

    request = fsp.request("WHERE -status = closed ORDER BY created DESC OFFSET 20 LIMIT 10")
    rows = store.select(request.plan())
    page = request.apply(rows)
"""

from fsp.api.fsp import FSP, FSPRequest, FSPResult
from fsp.config import FSPConfig
from fsp.parameters import (
    Cost,
    FSPQuery,
    FieldParameter,
    PageParameter,
    SortDirection,
    SortParameter,
)
from fsp.exceptions import (
    FSPError,
    EmptyFieldNameError,
    InvalidPageParameterError,
    ParameterParseError,
    UnknownFieldError,
    UnrecognizedMatchTypeError,
)

__all__ = [
    # Main API
    "FSP",
    "FSPRequest",
    "FSPResult",
    "FSPConfig",
    # Parameters
    "Cost",
    "FSPQuery",
    "FieldParameter",
    "PageParameter",
    "SortDirection",
    "SortParameter",
    # Errors
    "FSPError",
    "EmptyFieldNameError",
    "InvalidPageParameterError",
    "ParameterParseError",
    "UnknownFieldError",
    "UnrecognizedMatchTypeError",
]

__version__ = "0.1.0"
