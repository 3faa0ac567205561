"""
Composable search filters.

A search is described as a list of Filter records. apply_filters() folds the
list into a single WHERE clause of AND-ed predicates, each value bound as its
own parameter, so every search is one query and rows are matched by their
own identity.
"""

import enum
from dataclasses import dataclass
from typing import Any, Iterable, List

from sqlalchemy import and_, func
from sqlalchemy.orm import Query


class FilterOp(str, enum.Enum):
    """
    Supported predicate operators.

    - CONTAINS: case-insensitive substring match
    - GTE: column >= value
    - LTE: column <= value
    - NOT_NULL: column IS NOT NULL (value is ignored)
    """
    CONTAINS = "contains"
    GTE = "gte"
    LTE = "lte"
    NOT_NULL = "not_null"


@dataclass(frozen=True)
class Filter:
    column: Any
    op: FilterOp
    value: Any = None

    def to_predicate(self):
        if self.op == FilterOp.CONTAINS:
            # autoescape keeps user-supplied % and _ literal
            return func.lower(self.column).contains(str(self.value).lower(), autoescape=True)
        if self.op == FilterOp.GTE:
            return self.column >= self.value
        if self.op == FilterOp.LTE:
            return self.column <= self.value
        if self.op == FilterOp.NOT_NULL:
            return self.column.isnot(None)
        raise ValueError(f"Unsupported filter operator: {self.op}")


def build_predicates(filters: Iterable[Filter]) -> List:
    return [f.to_predicate() for f in filters]


def apply_filters(query: Query, filters: Iterable[Filter]) -> Query:
    """Add the AND of all filters to query; no filters leaves it untouched."""
    predicates = build_predicates(filters)
    if not predicates:
        return query
    return query.filter(and_(*predicates))
