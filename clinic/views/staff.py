from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.services.records import staff
from clinic.services.staff import department_overview
from .common import create_record, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([IsAdminRole])
def staff_list(request):
    """
    GET: the staff roster, ordered by surname.
    Query params: page, limit, search (name/email/position),
    department, role, isActive (true|false), shift.
    """
    if request.method == 'POST':
        return create_record(request, staff)
    return list_response(request, staff)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminRole])
def staff_detail(request, pk: int):
    return record_detail(request, staff, pk)


@api_view(['GET'])
@permission_classes([IsAdminRole])
def staff_departments(request):
    return Response({'ok': True, 'data': department_overview()})
