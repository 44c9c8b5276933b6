# -*- encoding: utf-8 -*-
"""
Filter factories for the common value types.

Each factory is registered under one field name and builds a fresh
FilterCriterion per FieldParameter:

- BooleanFilterFactory: "true"/"on"/"yes"/"1" match True, anything else False
- IntegerFilterFactory / LongFilterFactory: signed decimal equality
- StringFilterFactory: exact or partial, case-sensitive or not
- StringsFilterFactory: as String, true if any value of a collection matches

Typed factories never fail on malformed raw values: an unparsable match
becomes None, and a None match accepts no element.
"""

import re
from typing import Any, Iterable, Optional

from fsp.criteria.base import (
    Adapter,
    FilterCriteriaFactory,
    FilterCriterion,
    Predicate,
    StringMatchType,
)
from fsp.exceptions import UnrecognizedMatchTypeError
from fsp.parameters import FieldParameter


INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1
LONG_MIN, LONG_MAX = -(2 ** 63), 2 ** 63 - 1

_TRUE_WORDS = frozenset({"true", "on", "yes"})
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_nullable_boolean(value: Optional[str]) -> Optional[bool]:
    """
    Parse a raw filter value as a boolean.

    None stays None. "true", "on", "yes" (any case) and "1" are True,
    every other string is False.
    """
    if value is None:
        return None
    return value.lower() in _TRUE_WORDS or value == "1"


def parse_nullable_integer(
    value: Optional[str],
    minimum: int = INT_MIN,
    maximum: int = INT_MAX,
) -> Optional[int]:
    """
    Parse a raw filter value as a bounded signed decimal integer.

    Returns None for None, for anything that is not a plain decimal
    number and for values outside [minimum, maximum].
    """
    if value is None or not _DECIMAL.fullmatch(value):
        return None
    number = int(value)
    if number < minimum or number > maximum:
        return None
    return number


def string_matches(match_type: StringMatchType, value: Optional[str], match: Optional[str]) -> bool:
    """
    Match one string value against a filter value.

    Exact matches consider two Nones equal; partial matches never match
    when either side is None.

    Raises:
        UnrecognizedMatchTypeError: If match_type is not a StringMatchType
    """
    if match_type is StringMatchType.CASE_SENSITIVE_EXACT:
        return value == match
    if match_type is StringMatchType.CASE_INSENSITIVE_EXACT:
        if value is None or match is None:
            return value is match
        return value.lower() == match.lower()
    if match_type is StringMatchType.CASE_SENSITIVE_PARTIAL:
        if value is None or match is None:
            return False
        return match in value
    if match_type is StringMatchType.CASE_INSENSITIVE_PARTIAL:
        if value is None or match is None:
            return False
        return match.lower() in value.lower()
    raise UnrecognizedMatchTypeError(match_type)


def _equality_predicate(adapter: Adapter, match: Any) -> Predicate:
    """Null-safe equality: a None match or a None value never matches."""

    def _matches(element: Any) -> bool:
        value = adapter(element)
        if match is None or value is None:
            return False
        return value == match

    return _matches


class BooleanFilterFactory(FilterCriteriaFactory):
    """
    Factory returning criteria to match boolean values.

    Example:
        >>> factory = BooleanFilterFactory(lambda user: user.active, column="active")
        >>> criterion = factory.build(FieldParameter("active", "yes"))
        >>> criterion.match
        True
    """

    def build(self, parameter: FieldParameter) -> FilterCriterion:
        match = parse_nullable_boolean(parameter.raw_value)
        return FilterCriterion(
            cost=self.cost,
            including=parameter.including,
            column=self.column,
            match=match,
            predicate=_equality_predicate(self.adapter, match),
            kind="Boolean",
        )


class IntegerFilterFactory(FilterCriteriaFactory):
    """Factory returning criteria to match 32-bit integer values."""

    minimum = INT_MIN
    maximum = INT_MAX
    kind = "Integer"

    def build(self, parameter: FieldParameter) -> FilterCriterion:
        match = parse_nullable_integer(parameter.raw_value, self.minimum, self.maximum)
        return FilterCriterion(
            cost=self.cost,
            including=parameter.including,
            column=self.column,
            match=match,
            predicate=_equality_predicate(self.adapter, match),
            kind=self.kind,
        )


class LongFilterFactory(IntegerFilterFactory):
    """Factory returning criteria to match 64-bit integer values."""

    minimum = LONG_MIN
    maximum = LONG_MAX
    kind = "Long"


class StringFilterFactory(FilterCriteriaFactory):
    """
    Factory returning criteria to match string values.

    Without a column every comparison runs in memory; with a column the
    store-query builder may push the match down and the in-memory
    predicate is only a fallback.
    """

    def __init__(self, match_type: StringMatchType, adapter: Adapter, column: Optional[str] = None):
        super().__init__(adapter, column)
        self.match_type = match_type

    def build(self, parameter: FieldParameter) -> FilterCriterion:
        match_type = self.match_type
        adapter = self.adapter
        match = parameter.raw_value

        def _matches(element: Any) -> bool:
            return string_matches(match_type, adapter(element), match)

        return FilterCriterion(
            cost=self.cost,
            including=parameter.including,
            column=self.column,
            match=match,
            predicate=_matches,
            kind="String",
        )


class StringsFilterFactory(StringFilterFactory):
    """
    Factory for fields holding several strings (tags, aliases, ...).

    The adapter returns an iterable of strings, or None. An element
    matches if any of its strings matches.
    """

    def build(self, parameter: FieldParameter) -> FilterCriterion:
        match_type = self.match_type
        adapter = self.adapter
        match = parameter.raw_value

        def _matches(element: Any) -> bool:
            values: Optional[Iterable[str]] = adapter(element)
            if values is None:
                return False
            for value in values:
                if string_matches(match_type, value, match):
                    return True
            return False

        return FilterCriterion(
            cost=self.cost,
            including=parameter.including,
            column=self.column,
            match=match,
            predicate=_matches,
            kind="Strings",
        )
