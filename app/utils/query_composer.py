"""
Dynamic search/filter/sort/paginate query composition.

Filters are accumulated as SQLAlchemy expressions, so every user supplied
value reaches the database as a bound parameter and never as query text.
Sorting is resolved through a per-entity allow-list of columns; the raw
sort key from the request is only ever used as a dictionary key.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import Select, false, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from app.schemas.criteria import FilterCriteria


def id_set(column, ids: Optional[Sequence[str]]) -> Optional[ColumnElement[bool]]:
    """
    Membership predicate for an id-set filter.

    None means the filter is absent. An empty set is present but matches
    nothing, so it becomes an always-false predicate instead of vanishing.
    """
    if ids is None:
        return None
    if not ids:
        return false()
    return column.in_(list(ids))


def credited_to(entity_column, key_column, artist_column, artist_ids: Optional[Sequence[str]]):
    """
    Predicate: entity_column is credited to one of artist_ids through a link
    table (key_column, artist_column). None when the filter is absent.
    """
    if artist_ids is None:
        return None
    return entity_column.in_(select(key_column).where(id_set(artist_column, artist_ids)))


def text_match(term: str, *columns) -> ColumnElement[bool]:
    """Case-insensitive substring match of term against any of the columns."""
    return or_(*[column.icontains(term, autoescape=True) for column in columns])


@dataclass
class ComposedQuery:
    """Predicates, ordering and page window ready to apply to a statement."""

    predicates: list[ColumnElement[bool]] = field(default_factory=list)
    order_by: list[Any] = field(default_factory=list)
    limit: int = 0
    offset: int = 0

    def filter(self, stmt: Select) -> Select:
        """Apply predicates only (conjunctive)."""
        if not self.predicates:
            return stmt
        return stmt.where(*self.predicates)

    def page(self, stmt: Select) -> Select:
        """Apply predicates, ordering and LIMIT/OFFSET."""
        return (
            self.filter(stmt)
            .order_by(*self.order_by)
            .limit(self.limit)
            .offset(self.offset)
        )

    def count(self, id_column) -> Select:
        """Count statement over the same predicates; no ordering, no window."""
        return self.filter(select(func.count(id_column)))


class QueryComposer:
    """
    Builds ComposedQuery values for one entity.

    Args:
        id_column: Primary key; used for id-set filters and as the final
            sort key so pages never overlap.
        search_columns: Columns matched by the free-text search term.
        sort_columns: Allow-list mapping sort keys to sortable expressions.
        default_sort: Key used when the request has none or an unknown one.
    """

    def __init__(
        self,
        id_column,
        search_columns: Sequence[Any],
        sort_columns: Mapping[str, Any],
        default_sort: str,
    ):
        if default_sort not in sort_columns:
            raise ValueError(f"default sort {default_sort!r} is not an allowed sort key")
        self.id_column = id_column
        self.search_columns = tuple(search_columns)
        self.sort_columns = dict(sort_columns)
        self.default_sort = default_sort

    def predicates(
        self,
        criteria: FilterCriteria,
        extra: Sequence[Optional[ColumnElement[bool]]] = (),
    ) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []

        ids_clause = id_set(self.id_column, criteria.ids)
        if ids_clause is not None:
            clauses.append(ids_clause)

        if criteria.search_term and self.search_columns:
            clauses.append(text_match(criteria.search_term, *self.search_columns))

        clauses.extend(clause for clause in extra if clause is not None)
        return clauses

    def order_by(self, criteria: FilterCriteria) -> list[Any]:
        key = criteria.sort_by if criteria.sort_by in self.sort_columns else self.default_sort
        column = self.sort_columns[key]
        ordered = column.asc() if criteria.sort_order == "ASC" else column.desc()
        return [ordered.nulls_last(), self.id_column.asc()]

    def compose(
        self,
        criteria: FilterCriteria,
        extra: Sequence[Optional[ColumnElement[bool]]] = (),
    ) -> ComposedQuery:
        """
        Compose the full query for criteria.

        extra carries the entity-specific predicates (genre, type, emotion,
        related id sets); None entries are skipped.
        """
        return ComposedQuery(
            predicates=self.predicates(criteria, extra),
            order_by=self.order_by(criteria),
            limit=criteria.limit,
            offset=criteria.offset,
        )
