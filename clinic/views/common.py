"""
Shared plumbing for the record endpoints.

``list_response`` and ``record_detail`` keep every collection's list,
retrieve, update and delete handlers identical; the per-entity modules
only choose the collection and the permission class.
"""
from rest_framework import status
from rest_framework.response import Response

from clinic.serializers.common import LimitParamsSerializer, ListParamsSerializer
from clinic.services.audit import log_action


def _actor(request):
    user = getattr(request, 'user', None)
    return user if user is not None and user.is_authenticated else None


def list_response(request, collection, **fixed):
    """Search/filter/paginate ``collection`` from the query string."""
    ListParamsSerializer(data=request.query_params).is_valid(raise_exception=True)
    return Response(collection.list(request.query_params, **fixed).as_payload())


def limit_param(request) -> int:
    s = LimitParamsSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return s.validated_data['limit']


def create_record(request, collection):
    record = collection.repository.create(request.data)
    log_action(user=_actor(request), action=f'{collection.name}.create',
               object_type=collection.name, object_id=record['id'])
    return Response({'ok': True, 'data': record}, status=status.HTTP_201_CREATED)


def record_detail(request, collection, pk):
    """GET / PUT / PATCH / DELETE one record of ``collection``.

    PUT and PATCH both apply a partial update: edit forms post whatever
    fields they show.
    """
    repo = collection.repository
    if request.method == 'GET':
        return Response({'ok': True, 'data': repo.get(pk)})
    if request.method in ('PUT', 'PATCH'):
        record = repo.update(pk, request.data, partial=True)
        log_action(user=_actor(request), action=f'{collection.name}.update',
                   object_type=collection.name, object_id=record['id'],
                   detail={'fields': sorted(request.data.keys())})
        return Response({'ok': True, 'data': record})
    record = repo.delete(pk)
    log_action(user=_actor(request), action=f'{collection.name}.delete',
               object_type=collection.name, object_id=record['id'])
    return Response({'ok': True, 'data': record})
