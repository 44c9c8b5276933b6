# -*- encoding: utf-8 -*-
"""
Sort factories.

- SortFactory: natural ordering of any comparable adapted value
- DateSortFactory: datetimes, dates or ISO-8601 strings, compared in UTC

A factory without a column only produces EXPENSIVE criteria. Since sorts
are not commutative, one expensive key makes the whole sort expensive
(see fsp.engine.sort_engine).
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional

from fsp.criteria.base import (
    Adapter,
    SortCriteriaFactory,
    SortCriterion,
)
from fsp.parameters import SortParameter


class SortFactory(SortCriteriaFactory):
    """
    Factory that creates criteria sorting by the natural order of a value.

    Example:
        >>> factory = SortFactory(False, lambda order: order.total, column="total")
        >>> factory.build(SortParameter("total", SortDirection.DESCENDING))
        SortCriterion(column=total, descending=True, nulls_first=False)
    """

    def build(self, parameter: SortParameter) -> SortCriterion:
        return SortCriterion(
            cost=self.cost,
            column=self.column,
            descending=parameter.descending,
            nulls_first=self.nulls_first,
            key=self.adapter,
        )


def to_utc(value: Any) -> Optional[datetime]:
    """
    Normalize a date-like value to an aware UTC datetime.

    Naive datetimes are taken to be UTC. Dates become midnight UTC.
    Strings are parsed as ISO-8601; a string that does not parse gives
    None, like a missing value.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_adapter(adapter: Adapter) -> Adapter:
    """Wrap adapter so its values come out as UTC datetimes (or None)."""
    return lambda element: to_utc(adapter(element))


class DateSortFactory(SortCriteriaFactory):
    """
    A factory returning criteria to sort by date/time values.

    The adapter may return datetimes, dates or ISO-8601 strings. Values
    are normalized before comparison, so unparsable strings are placed
    with the None values according to nulls_first.
    """

    def build(self, parameter: SortParameter) -> SortCriterion:
        return SortCriterion(
            cost=self.cost,
            column=self.column,
            descending=parameter.descending,
            nulls_first=self.nulls_first,
            key=utc_adapter(self.adapter),
        )
