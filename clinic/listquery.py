"""
Search, filter and paginate in-memory collections.

Every list endpoint answers the same question: given the full snapshot of
a collection, which records match a free-text search and a set of
field-equality filters, and which page of those matches should be
returned?  This module answers it once.

The evaluator is a pure function of ``(collection, query)``.  It performs
no I/O, never sorts (the caller decides the order of the snapshot) and
never raises: out-of-range pages simply produce an empty page.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

Entity = Mapping[str, Any]

DEFAULT_PAGE_SIZE = 10


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == '' or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


@dataclass(frozen=True)
class ListQuery:
    """A single list request: 1-based ``page``, ``page_size``, search and filters."""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    search: Optional[str] = None
    filters: Mapping[str, Any] = field(default_factory=dict)

    def normalized(self) -> 'ListQuery':
        page = _as_int(self.page) or 0
        page_size = _as_int(self.page_size) or 0
        return ListQuery(
            page=page if page >= 1 else 1,
            page_size=page_size if page_size >= 1 else 1,
            search=self.search,
            filters=self.filters,
        )

    def active_filters(self) -> dict[str, Any]:
        return {k: v for k, v in (self.filters or {}).items() if v is not None and v != ''}


@dataclass(frozen=True)
class ListResult:
    items: list
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def as_payload(self) -> dict:
        """Shape used by every list endpoint."""
        return {
            'ok': True,
            'data': list(self.items),
            'pagination': {
                'total': self.total,
                'page': self.page,
                'pageSize': self.page_size,
                'totalPages': self.total_pages,
            },
        }


def matches_search(entity: Entity, term: str, searchable: Iterable[str]) -> bool:
    needle = term.lower()
    for name in searchable:
        value = entity.get(name)
        if value is None:
            continue
        if needle in _text(value).lower():
            return True
    return False


def matches_filters(entity: Entity, filters: Mapping[str, Any]) -> bool:
    for name, expected in filters.items():
        if name not in entity:
            return False
        value = entity[name]
        if isinstance(value, str) and isinstance(expected, str):
            if value != expected:
                return False
        elif value != expected and _text(value) != _text(expected):
            return False
    return True


def evaluate(collection: Sequence[Entity], query: ListQuery, searchable: Iterable[str] = ()) -> ListResult:
    """Return the ``query.page``-th page of the records matching ``query``.

    An entity qualifies when it contains ``query.search`` (case-insensitive)
    in any of the ``searchable`` fields AND equals every non-empty filter.
    The input order is preserved.
    """
    query = query.normalized()
    searchable = tuple(searchable)
    term = query.search or ''
    if not term.strip():
        term = ''
    filters = query.active_filters()

    matched = [
        entity for entity in collection
        if (not term or matches_search(entity, term, searchable))
        and (not filters or matches_filters(entity, filters))
    ]
    offset = (query.page - 1) * query.page_size
    return ListResult(
        items=matched[offset:offset + query.page_size],
        total=len(matched),
        page=query.page,
        page_size=query.page_size,
    )


@dataclass(frozen=True)
class ListSpec:
    """Which fields of a collection are searchable and filterable.

    ``filters`` maps the query-string key to the entity field it compares
    against; most keys map to themselves.
    """
    searchable: tuple[str, ...] = ()
    filters: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def of(cls, searchable: Iterable[str] = (), filters: Iterable[str] = (), **aliases: str) -> 'ListSpec':
        mapping = {name: name for name in filters}
        mapping.update(aliases)
        return cls(searchable=tuple(searchable), filters=mapping)

    def parse(self, params: Mapping[str, Any], *, default_page_size: int = DEFAULT_PAGE_SIZE,
              max_page_size: Optional[int] = None) -> ListQuery:
        """Build a query from REST parameters ``page``, ``limit``, ``search`` and filter keys."""
        page = _as_int(params.get('page')) or 1
        page_size = _as_int(params.get('limit') or params.get('pageSize'))
        if page_size is None:
            page_size = default_page_size
        if max_page_size and page_size > max_page_size:
            page_size = max_page_size
        search = params.get('search') or params.get('q') or None
        filters = {}
        for key, target in self.filters.items():
            value = params.get(key)
            if value is not None and value != '':
                filters[target] = value
        return ListQuery(page=page, page_size=page_size, search=search, filters=filters)

    def evaluate(self, collection: Sequence[Entity], query: ListQuery) -> ListResult:
        return evaluate(collection, query, self.searchable)
