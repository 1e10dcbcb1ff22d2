from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import CareTeamWrite
from clinic.serializers.appointment import AppointmentStatusSerializer
from clinic.services import appointments as appointment_service
from clinic.services.audit import log_action
from clinic.services.records import appointments
from .common import create_record, limit_param, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([CareTeamWrite])
def appointment_list(request):
    """
    GET: search/filter/paginate appointments.
    Query params: page, limit, search (patient/doctor name, type),
    status, doctorId, patientId, date (YYYY-MM-DD), type.
    """
    if request.method == 'POST':
        return create_record(request, appointments)
    return list_response(request, appointments)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([CareTeamWrite])
def appointment_detail(request, pk: int):
    return record_detail(request, appointments, pk)


@api_view(['PATCH', 'PUT'])
@permission_classes([CareTeamWrite])
def appointment_status(request, pk: int):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = appointment_service.set_status(pk, s.validated_data['status'])
    log_action(user=request.user, action='appointments.status', object_type='appointments',
               object_id=record['id'], detail={'status': record['status']})
    return Response({'ok': True, 'data': record})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def appointments_today(request):
    return Response({'ok': True, 'data': appointment_service.todays_appointments()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def appointments_recent(request):
    return Response({'ok': True, 'data': appointment_service.recent_appointments(limit=limit_param(request))})
