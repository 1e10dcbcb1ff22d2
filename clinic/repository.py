"""
Record stores behind the list and detail endpoints.

Two implementations share one small interface (``all``, ``get``,
``create``, ``update``, ``delete``), all of them trading in plain
serialized dictionaries:

* :class:`ModelRepository` wraps a Django model and the DRF serializer
  that validates and renders it.  This is what the API uses.
* :class:`InMemoryRepository` keeps dictionaries in a list owned by the
  instance.  It takes an injectable clock and id factory so fixtures and
  tests get deterministic ids and timestamps.
"""
from __future__ import annotations

import itertools
from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Iterable, Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)


class RecordNotFound(LookupError):
    """Raised when no record exists for the requested id."""

    def __init__(self, name: str, pk: Any):
        super().__init__(f'{name} not found with ID: {pk}')
        self.name = name
        self.pk = pk


def _utcnow() -> datetime:
    return datetime.now(dt_timezone.utc)


class InMemoryRepository:
    """A list of records owned by this object, newest first."""

    def __init__(self, records: Iterable[Mapping[str, Any]] = (), *, name: str = 'record',
                 clock: Optional[Callable[[], datetime]] = None,
                 id_factory: Optional[Callable[[], Any]] = None):
        self.name = name
        self._records: list[dict] = [dict(r) for r in records]
        self._clock = clock or _utcnow
        if id_factory is None:
            start = max((int(r['id']) for r in self._records if str(r.get('id', '')).isdigit()), default=0)
            counter = itertools.count(start + 1)
            id_factory = lambda: next(counter)  # noqa: E731
        self._next_id = id_factory

    def _index(self, pk: Any) -> int:
        for i, record in enumerate(self._records):
            if str(record.get('id')) == str(pk):
                return i
        raise RecordNotFound(self.name, pk)

    def all(self) -> list[dict]:
        return [dict(r) for r in self._records]

    def get(self, pk: Any) -> dict:
        return dict(self._records[self._index(pk)])

    def create(self, data: Mapping[str, Any]) -> dict:
        stamp = self._clock().isoformat()
        record = {**data, 'id': self._next_id(), 'createdAt': stamp, 'updatedAt': stamp}
        self._records.insert(0, record)
        logger.debug('record_created', collection=self.name, id=record['id'])
        return dict(record)

    def update(self, pk: Any, data: Mapping[str, Any], *, partial: bool = True) -> dict:
        i = self._index(pk)
        current = self._records[i]
        base = current if partial else {'id': current['id'], 'createdAt': current.get('createdAt')}
        record = {**base, **data, 'id': current['id'], 'updatedAt': self._clock().isoformat()}
        self._records[i] = record
        return dict(record)

    def delete(self, pk: Any) -> dict:
        return self._records.pop(self._index(pk))


class ModelRepository:
    """Django ORM store rendered through a DRF serializer."""

    def __init__(self, model, serializer_class, *, ordering: tuple[str, ...] = ('-created_at', '-id'),
                 select_related: tuple[str, ...] = ()):
        self.model = model
        self.serializer_class = serializer_class
        self.ordering = ordering
        self.select_related = select_related
        self.name = model._meta.verbose_name.title()

    def queryset(self):
        qs = self.model.objects.all()
        if self.select_related:
            qs = qs.select_related(*self.select_related)
        return qs.order_by(*self.ordering)

    def get_object(self, pk: Any):
        try:
            return self.queryset().get(pk=pk)
        except (self.model.DoesNotExist, ValueError, TypeError):
            raise RecordNotFound(self.name, pk)

    def all(self) -> list[dict]:
        return [dict(row) for row in self.serializer_class(self.queryset(), many=True).data]

    def get(self, pk: Any) -> dict:
        return dict(self.serializer_class(self.get_object(pk)).data)

    def create(self, data: Mapping[str, Any]) -> dict:
        serializer = self.serializer_class(data=data)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        logger.info('record_created', collection=self.name, id=instance.pk)
        return dict(self.serializer_class(instance).data)

    def update(self, pk: Any, data: Mapping[str, Any], *, partial: bool = True) -> dict:
        instance = self.get_object(pk)
        serializer = self.serializer_class(instance, data=data, partial=partial)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        logger.info('record_updated', collection=self.name, id=instance.pk)
        return dict(self.serializer_class(instance).data)

    def delete(self, pk: Any) -> dict:
        instance = self.get_object(pk)
        record = dict(self.serializer_class(instance).data)
        instance.delete()
        logger.info('record_deleted', collection=self.name, id=pk)
        return record
