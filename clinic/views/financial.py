from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.billing import PeriodParamsSerializer, YearParamsSerializer
from clinic.serializers.common import ListParamsSerializer
from clinic.services import finance
from clinic.services.records import bills
from .common import create_record, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([IsAdminRole])
def bill_list(request):
    """
    GET: search/filter/paginate bills.
    Query params: page, limit, search (invoice number, patient, description),
    status, paymentMethod, insuranceStatus, department, patientId.
    """
    if request.method == 'POST':
        return create_record(request, bills)
    return list_response(request, bills)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminRole])
def bill_detail(request, pk: int):
    return record_detail(request, bills, pk)


@api_view(['GET'])
@permission_classes([IsAdminRole])
def financial_overview(request):
    s = PeriodParamsSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': finance.overview(period=s.validated_data['period'])})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def financial_revenue(request):
    s = YearParamsSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': finance.monthly_revenue(year=s.validated_data.get('year'))})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def financial_overdue(request):
    """
    Overdue open bills with age buckets.
    Query params: page, limit, search (invoice number, patient),
    ageRange (0-30|31-60|61-90|90+), department, insuranceStatus.
    """
    ListParamsSerializer(data=request.query_params).is_valid(raise_exception=True)
    return Response(finance.overdue(request.query_params))


@api_view(['GET'])
@permission_classes([IsAdminRole])
def financial_insurance(request):
    return Response({'ok': True, 'data': finance.insurance_summary()})
