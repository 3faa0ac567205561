"""
Helpers for turning request data into SQL update fragments.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from jobly.core.errors import BadRequestError


@dataclass
class PartialUpdate:
    """
    Result of sql_for_partial_update().

    set_cols: the part of an UPDATE that follows SET, e.g. '"name"=$1, "num_employees"=$2'.
        Only for callers that issue raw SQL; the ORM-backed crud modules ignore it.
    values: the bind values for set_cols, in placeholder order
    columns: the same pairs keyed by storage column; crud applies these with setattr()
    """
    set_cols: str
    values: List[Any]
    columns: Dict[str, Any] = field(default_factory=dict)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> PartialUpdate:
    """
    Build the SET fragment of a partial update.

    Only the fields present in data_to_update are touched. Field names are
    translated to column names through js_to_sql and fall back to the field
    name itself when no mapping exists:

        >>> sql_for_partial_update({"name": "Acme", "numEmployees": 32},
        ...                        {"numEmployees": "num_employees"}).set_cols
        '"name"=$1, "num_employees"=$2'

    Raises:
        BadRequestError: If there is nothing to update
    """
    if not data_to_update:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    columns: Dict[str, Any] = {}
    fragments = []
    for idx, (field_name, value) in enumerate(data_to_update.items(), start=1):
        column = js_to_sql.get(field_name, field_name)
        fragments.append(f'"{column}"=${idx}')
        columns[column] = value

    return PartialUpdate(
        set_cols=", ".join(fragments),
        values=list(data_to_update.values()),
        columns=columns,
    )
