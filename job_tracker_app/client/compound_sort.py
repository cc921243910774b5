"""
Display ordering for a loaded application listing.

The order is a multi-key comparator: one equality-partition key per priority
status (records with that status first, regardless of direction), followed
by a single typed key on the base sort field that honors the direction.
Python's sort is stable, so records equal on every key keep their input order.
"""
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

Record = Dict[str, Any]
Comparator = Callable[[Record, Record], int]

# Fields whose missing values sort last in both directions, as the server does.
NULLS_LAST_FIELDS = {"appliedDate", "applied_date"}


def toggle_priority(priority_statuses: Sequence[str], status: str) -> List[str]:
    """Append ``status`` if absent, otherwise remove it keeping the rest in order."""
    if status in priority_statuses:
        return [s for s in priority_statuses if s != status]
    return list(priority_statuses) + [status]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sortable(value: Any):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _type_rank(value: Any) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return 0
    if isinstance(value, str):
        return 1
    return 2


def compare_values(a: Any, b: Any) -> int:
    """
    Natural ordering over numbers, strings and dates. Missing values are the
    minimum. Values of different kinds order by kind first (numbers before
    strings before anything else), so mixed columns sort consistently.
    """
    a_missing, b_missing = _is_missing(a), _is_missing(b)
    if a_missing or b_missing:
        return (not a_missing) - (not b_missing)
    a, b = _sortable(a), _sortable(b)
    a_rank, b_rank = _type_rank(a), _type_rank(b)
    if a_rank != b_rank:
        return (a_rank > b_rank) - (a_rank < b_rank)
    try:
        return (a > b) - (a < b)
    except TypeError:
        a, b = str(a), str(b)
        return (a > b) - (a < b)


def priority_key(status: str) -> Comparator:
    """Records with ``status`` sort before records without it."""
    def compare(a: Record, b: Record) -> int:
        return (b.get("status") == status) - (a.get("status") == status)
    return compare


def field_key(sort_field: str, sort_direction: str = "desc") -> Comparator:
    sign = 1 if (sort_direction or "").strip() == "asc" else -1
    nulls_last = sort_field in NULLS_LAST_FIELDS

    def compare(a: Record, b: Record) -> int:
        a_value, b_value = a.get(sort_field), b.get(sort_field)
        if nulls_last:
            a_missing, b_missing = _is_missing(a_value), _is_missing(b_value)
            if a_missing != b_missing:
                return 1 if a_missing else -1
        return sign * compare_values(a_value, b_value)
    return compare


def compound_comparator(
    priority_statuses: Iterable[str],
    sort_field: str,
    sort_direction: str = "desc",
) -> Comparator:
    keys: List[Comparator] = [priority_key(s) for s in priority_statuses]
    keys.append(field_key(sort_field, sort_direction))

    def compare(a: Record, b: Record) -> int:
        for key in keys:
            result = key(a, b)
            if result:
                return result
        return 0
    return compare


def order(
    records: Iterable[Record],
    priority_statuses: Optional[Iterable[str]],
    sort_field: str,
    sort_direction: str = "desc",
) -> List[Record]:
    """Return ``records`` in display order; the input is left untouched."""
    comparator = compound_comparator(priority_statuses or [], sort_field, sort_direction)
    return sorted(records, key=cmp_to_key(comparator))
