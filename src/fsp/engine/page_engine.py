# -*- encoding: utf-8 -*-
"""
Page Engine - windows a result set in the store or in memory.

As soon as either filtering or sorting has to run in memory, the store
can no longer page: it does not know which rows survive or in which
order. In that case the window is cut from the in-memory sequence.

Store bounds are 1-based so the query builder can use them directly.
"""

import logging
from collections.abc import Collection
from itertools import islice
from typing import Any, Iterable, Optional, TYPE_CHECKING

from fsp.parameters import Cost, PageParameter

if TYPE_CHECKING:
    from fsp.engine.filter_engine import FilterEngine
    from fsp.engine.sort_engine import SortEngine

logger = logging.getLogger(__name__)


def derive_cost(
    filter_engine: Optional["FilterEngine"],
    sort_engine: Optional["SortEngine"],
) -> Cost:
    """EXPENSIVE as soon as we either have to filter or to sort in memory."""
    if filter_engine is not None and filter_engine.is_expensive():
        return Cost.EXPENSIVE
    if sort_engine is not None and not sort_engine.is_cheap():
        return Cost.EXPENSIVE
    return Cost.CHEAP


class PageEngine:
    """
    Resolve a page window and apply it where it belongs.

    Example:
        >>> pager = PageEngine(PageParameter(1, 4), cost=Cost.CHEAP)
        >>> pager.lower_bound(), pager.upper_bound()
        (2, 6)
        >>> PageEngine(PageParameter(1, 4), cost=Cost.EXPENSIVE).page(list(range(10)))
        [1, 2, 3, 4]
    """

    def __init__(
        self,
        page: Optional[PageParameter] = None,
        filter_engine: Optional["FilterEngine"] = None,
        sort_engine: Optional["SortEngine"] = None,
        cost: Optional[Cost] = None,
    ):
        """
        Args:
            page: Requested window; None means no paging
            filter_engine: Engine whose verdict decides the cost
            sort_engine: Engine whose verdict decides the cost
            cost: Explicit cost, overrides the engines' verdicts
        """
        page = page or PageParameter()
        self.start = page.start
        self.limit = page.limit
        self.filter_engine = filter_engine
        self.sort_engine = sort_engine
        self.cost = cost if cost is not None else derive_cost(filter_engine, sort_engine)

        logger.debug(
            "Page start=%s limit=%s classified %s", self.start, self.limit, self.cost.value
        )

    def is_cheap(self) -> bool:
        return self.cost is Cost.CHEAP

    def lower_bound(self) -> Optional[int]:
        """1-based first row for the store query, or None if not needed."""
        if self.is_cheap() and self.start:
            return self.start + 1
        return None

    def upper_bound(self) -> Optional[int]:
        """
        1-based upper bound for the store query, or None.

        Without a limit there is nothing to clamp, so no bound is returned.
        """
        if self.is_cheap() and self.limit is not None:
            return self.start + 1 + self.limit
        return None

    def page(self, elements: Iterable[Any]) -> Iterable[Any]:
        """
        Cut the window out of elements in memory.

        Skips the first `start` elements (0-based), then emits up to `limit`
        elements, or all remaining ones without a limit. Works in a single
        forward pass and stops pulling once the window is full.

        Returns:
            elements itself when no paging was requested or the store
            pages; otherwise a list for collection input and a lazy
            iterator for iterable input.
        """
        if self.start is None or self.is_cheap():
            return elements

        stop = None if self.limit is None else self.start + self.limit
        window = islice(elements, self.start, stop)
        if isinstance(elements, Collection):
            return list(window)
        return window

    def __repr__(self) -> str:
        return f"PageEngine(start={self.start}, limit={self.limit}, cost={self.cost.value})"
