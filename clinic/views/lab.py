from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import CareTeamWrite, ClinicianWrite
from clinic.serializers.lab import LabStatusSerializer
from clinic.services import lab
from clinic.services.audit import log_action
from clinic.services.records import lab_reports
from .common import create_record, limit_param, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([ClinicianWrite])
def lab_report_list(request):
    """
    GET: search/filter/paginate lab reports.
    Query params: page, limit, search (test/patient/doctor name),
    status, testType, patientId, doctorId.
    """
    if request.method == 'POST':
        return create_record(request, lab_reports)
    return list_response(request, lab_reports)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([ClinicianWrite])
def lab_report_detail(request, pk: int):
    return record_detail(request, lab_reports, pk)


@api_view(['PATCH', 'PUT'])
@permission_classes([CareTeamWrite])
def lab_report_status(request, pk: int):
    # nurses record sample progress, so status is writable by the whole care team
    s = LabStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = lab.set_status(pk, s.validated_data['status'])
    log_action(user=request.user, action='lab-reports.status', object_type='lab-reports',
               object_id=record['id'], detail={'status': record['status']})
    return Response({'ok': True, 'data': record})


@api_view(['POST'])
@permission_classes([ClinicianWrite])
@parser_classes([MultiPartParser, FormParser])
def lab_report_attachment(request, pk: int):
    upload = request.FILES.get('file')
    if upload is None:
        return Response({'ok': False, 'error': {'code': 'validation_error', 'message': 'file is required'}},
                        status=400)
    record = lab.attach_file(pk, upload)
    log_action(user=request.user, action='lab-reports.attachment', object_type='lab-reports',
               object_id=record['id'], detail={'name': upload.name, 'size': upload.size})
    return Response({'ok': True, 'data': record})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lab_report_stats(request):
    return Response({'ok': True, 'data': lab.stats()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lab_report_recent(request):
    return Response({'ok': True, 'data': lab.recent_reports(limit=limit_param(request))})
