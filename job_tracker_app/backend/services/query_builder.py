"""
Listing query construction for the application tracker.

Request parameters are untrusted UI state. They are normalized into a
``ListingQuery`` and compiled into a SQLAlchemy ``Select`` from a closed set
of predicate and ordering variants. User-supplied values only ever travel as
bound parameters; column references come from ``SORTABLE_COLUMNS``.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy import ColumnElement, Select, func, or_, select

from ..models.db.application import Application

logger = logging.getLogger(__name__)

DEFAULT_SORT_BY = "appliedDate"
DEFAULT_SORT_DIRECTION = "desc"

# Public sort key -> model column. snake_case aliases keep older clients working.
SORTABLE_COLUMNS = {
    "appliedDate": Application.applied_date,
    "createdAt": Application.created_at,
    "company": Application.company,
    "status": Application.status,
}
SORT_ALIASES = {
    "applied_date": "appliedDate",
    "created_at": "createdAt",
}


def resolve_sort_by(sort_by: Optional[str]) -> str:
    key = (sort_by or "").strip()
    key = SORT_ALIASES.get(key, key)
    if key not in SORTABLE_COLUMNS:
        if key:
            logger.debug("Unknown sortBy %r, falling back to %s", key, DEFAULT_SORT_BY)
        return DEFAULT_SORT_BY
    return key


def resolve_sort_direction(direction: Optional[str]) -> str:
    return "asc" if (direction or "").strip() == "asc" else "desc"


def normalize_statuses(statuses: Union[None, str, Iterable[str]]) -> List[str]:
    if statuses is None:
        return []
    if isinstance(statuses, str):
        statuses = [statuses]
    return [s.strip() for s in statuses if s is not None and str(s).strip()]


# --- predicates -------------------------------------------------------------

@dataclass(frozen=True)
class OwnedBy:
    user_id: int

    def clause(self) -> ColumnElement:
        return Application.user_id == self.user_id


@dataclass(frozen=True)
class StatusEquals:
    status: str

    def clause(self) -> ColumnElement:
        return Application.status == self.status


@dataclass(frozen=True)
class StatusIn:
    statuses: Tuple[str, ...]

    def clause(self) -> ColumnElement:
        return Application.status.in_(self.statuses)


@dataclass(frozen=True)
class TextSearch:
    text: str

    def clause(self) -> ColumnElement:
        # autoescape makes % and _ in the search text match literally
        return or_(
            Application.company.icontains(self.text, autoescape=True),
            Application.title.icontains(self.text, autoescape=True),
        )


Predicate = Union[OwnedBy, StatusEquals, StatusIn, TextSearch]


# --- orderings --------------------------------------------------------------

def _directed(column, direction: str):
    return column.asc() if direction == "asc" else column.desc()


@dataclass(frozen=True)
class FieldOrdering:
    """Order by an allow-listed column, then by id, in one direction."""
    sort_by: str
    direction: str

    def clauses(self) -> List[ColumnElement]:
        column = SORTABLE_COLUMNS[self.sort_by]
        return [_directed(column, self.direction), _directed(Application.id, self.direction)]


@dataclass(frozen=True)
class NullsLastOrdering(FieldOrdering):
    """Like FieldOrdering, but rows with a null value always come last."""

    def clauses(self) -> List[ColumnElement]:
        column = SORTABLE_COLUMNS[self.sort_by]
        return [column.is_(None).asc()] + super().clauses()


Ordering = Union[FieldOrdering, NullsLastOrdering]

NULLS_LAST_FIELDS = {"appliedDate"}


@dataclass
class ListingQuery:
    """Normalized listing parameters. Construction never fails."""
    statuses: List[str] = field(default_factory=list)
    search: Optional[str] = None
    sort_by: str = DEFAULT_SORT_BY
    sort_direction: str = DEFAULT_SORT_DIRECTION

    @classmethod
    def from_params(
        cls,
        statuses: Union[None, str, Iterable[str]] = None,
        q: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> "ListingQuery":
        search = (q or "").strip() or None
        return cls(
            statuses=normalize_statuses(statuses),
            search=search,
            sort_by=resolve_sort_by(sort_by),
            sort_direction=resolve_sort_direction(sort_direction),
        )

    def predicates(self, user_id: int) -> List[Predicate]:
        predicates: List[Predicate] = [OwnedBy(user_id)]
        if len(self.statuses) == 1:
            predicates.append(StatusEquals(self.statuses[0]))
        elif len(self.statuses) > 1:
            predicates.append(StatusIn(tuple(self.statuses)))
        if self.search:
            predicates.append(TextSearch(self.search))
        return predicates

    def ordering(self) -> Ordering:
        if self.sort_by in NULLS_LAST_FIELDS:
            return NullsLastOrdering(self.sort_by, self.sort_direction)
        return FieldOrdering(self.sort_by, self.sort_direction)


def build_listing_statement(user_id: int, listing_query: ListingQuery) -> Select:
    """Select one user's applications, filtered and ordered per ``listing_query``."""
    where = [p.clause() for p in listing_query.predicates(user_id)]
    return (
        select(Application)
        .where(*where)
        .order_by(*listing_query.ordering().clauses())
    )


def build_status_count_statement(user_id: int, listing_query: ListingQuery) -> Select:
    """Count the filtered listing's rows per status."""
    where = [p.clause() for p in listing_query.predicates(user_id)]
    return (
        select(Application.status, func.count(Application.id))
        .where(*where)
        .group_by(Application.status)
    )
