# -*- encoding: utf-8 -*-
"""
FSP Parameters - value types describing one filter, sort or page request.

These are produced by whatever parses the incoming request (see
fsp.parser for the bundled clause parser) and consumed by the engines.
They are immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from fsp.exceptions import EmptyFieldNameError, InvalidPageParameterError


INCLUDE_SIGIL = "+"
EXCLUDE_SIGIL = "-"


class Cost(Enum):
    """
    Where an operation runs.

    - CHEAP: can be pushed down into the backing store
    - EXPENSIVE: must run in application memory
    """
    CHEAP = "cheap"
    EXPENSIVE = "expensive"

    @classmethod
    def parse(cls, value: Union[str, "Cost"]) -> "Cost":
        """Parse a cost from its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown cost '{value}', expected 'cheap' or 'expensive'") from None


class SortDirection(Enum):
    """
    Sort directions. Only ascending and descending are supported.

    The value is the one-letter status code used on the wire.
    """
    ASCENDING = "A"
    DESCENDING = "D"

    def __str__(self) -> str:
        return self.value

    @property
    def status(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortDirection":
        """
        Parse a direction from a status code or word.

        Accepts "A"/"D" and "asc"/"desc"/"ascending"/"descending" in any
        case. Anything else, including None, is ASCENDING.

        Examples:
            >>> SortDirection.parse("D")
            <SortDirection.DESCENDING: 'D'>
            >>> SortDirection.parse(None)
            <SortDirection.ASCENDING: 'A'>
        """
        if value is None:
            return cls.ASCENDING
        if isinstance(value, cls):
            return value

        token = str(value).strip().upper()
        if token in ("D", "DESC", "DESCENDING"):
            return cls.DESCENDING
        return cls.ASCENDING


@dataclass(frozen=True)
class FieldParameter:
    """
    One filter criterion as requested by the caller.

    The field name may carry a leading sigil: "+" includes matches,
    "-" excludes them, no sigil includes. The sigil is stripped and the
    remaining name lower-cased.

    Example:
        >>> p = FieldParameter("-Status", "closed")
        >>> p.field_name, p.raw_value, p.including
        ('status', 'closed', False)

    Raises:
        EmptyFieldNameError: If the name is empty or only a sigil
    """
    field_name: str
    raw_value: Optional[str] = None
    including: bool = True

    def __post_init__(self):
        raw_name = self.field_name
        if not raw_name:
            raise EmptyFieldNameError(raw_name)

        name = raw_name
        if name[0] == INCLUDE_SIGIL:
            name = name[1:]
            object.__setattr__(self, "including", True)
        elif name[0] == EXCLUDE_SIGIL:
            name = name[1:]
            object.__setattr__(self, "including", False)

        name = name.lower()
        if not name:
            raise EmptyFieldNameError(raw_name)
        object.__setattr__(self, "field_name", name)


@dataclass(frozen=True)
class SortParameter:
    """A single sort key. The field name is lower-cased on construction."""
    field_name: str
    direction: SortDirection = SortDirection.ASCENDING

    def __post_init__(self):
        object.__setattr__(self, "field_name", self.field_name.lower())
        if not isinstance(self.direction, SortDirection):
            object.__setattr__(self, "direction", SortDirection.parse(self.direction))

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING


@dataclass(frozen=True)
class PageParameter:
    """
    Requested page window.

    If a limit is given without a start, the window starts at 0. Both
    unset means no paging was requested.
    """
    start: Optional[int] = None
    limit: Optional[int] = None

    def __post_init__(self):
        if self.start is not None and self.start < 0:
            raise InvalidPageParameterError(f"page start must not be negative: {self.start}")
        if self.limit is not None and self.limit < 0:
            raise InvalidPageParameterError(f"page limit must not be negative: {self.limit}")
        if self.start is None and self.limit is not None:
            object.__setattr__(self, "start", 0)

    @property
    def requested(self) -> bool:
        return self.start is not None


@dataclass
class FSPQuery:
    """
    A complete filter/sort/page request.

    Filters are ANDed across fields and ORed within a field; sorts are in
    priority order (first is the primary key).
    """
    filters: list[FieldParameter] = field(default_factory=list)
    sorts: list[SortParameter] = field(default_factory=list)
    page: PageParameter = field(default_factory=PageParameter)
