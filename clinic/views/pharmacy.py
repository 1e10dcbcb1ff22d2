from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import AdminWrite
from clinic.serializers.pharmacy import ExpiringParamsSerializer, LowStockParamsSerializer, StockAdjustSerializer
from clinic.services import pharmacy
from clinic.services.audit import log_action
from clinic.services.records import medicines
from .common import create_record, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([AdminWrite])
def medicine_list(request):
    """
    GET: search/filter/paginate the medicine catalogue.
    Query params: page, limit, search (name/description/manufacturer/category),
    category, requiresPrescription (true|false).
    """
    if request.method == 'POST':
        return create_record(request, medicines)
    return list_response(request, medicines)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([AdminWrite])
def medicine_detail(request, pk: int):
    return record_detail(request, medicines, pk)


@api_view(['PATCH', 'PUT'])
@permission_classes([AdminWrite])
def medicine_stock(request, pk: int):
    s = StockAdjustSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    delta = s.validated_data['stockDelta']
    record = pharmacy.adjust_stock(pk, delta)
    log_action(user=request.user, action='medicines.stock', object_type='medicines',
               object_id=record['id'], detail={'delta': delta, 'stock': record['stock']})
    return Response({'ok': True, 'data': record})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def medicines_low_stock(request):
    s = LowStockParamsSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': pharmacy.low_stock(**s.validated_data)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def medicines_expiring(request):
    s = ExpiringParamsSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': pharmacy.expiring(**s.validated_data)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def medicines_stats(request):
    return Response({'ok': True, 'data': pharmacy.stats()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def medicines_by_category(request, name: str):
    return list_response(request, medicines, category=name)
