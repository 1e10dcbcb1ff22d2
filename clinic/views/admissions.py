from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import ClinicianWrite
from clinic.serializers.admission import DischargeSerializer
from clinic.services import admissions as admission_service
from clinic.services.audit import log_action
from clinic.services.records import admissions
from .common import create_record, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([ClinicianWrite])
def admission_list(request):
    """
    GET: search/filter/paginate admissions.
    Query params: page, limit, search (patient/doctor name, room, reason),
    status, patientId, doctorId, wardType.
    """
    if request.method == 'POST':
        return create_record(request, admissions)
    return list_response(request, admissions)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([ClinicianWrite])
def admission_detail(request, pk: int):
    return record_detail(request, admissions, pk)


@api_view(['PUT', 'PATCH'])
@permission_classes([ClinicianWrite])
def admission_discharge(request, pk: int):
    s = DischargeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    record = admission_service.discharge(
        pk,
        discharge_date=vd.get('dischargeDate'),
        notes=vd.get('dischargeNotes', ''),
        summary=vd.get('dischargeSummary', ''),
    )
    log_action(user=request.user, action='admissions.discharge', object_type='admissions',
               object_id=record['id'], detail={'dischargeDate': str(record['dischargeDate'])})
    return Response({'ok': True, 'data': record})
