from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import CareTeamWrite
from clinic.services.records import admissions, appointments, lab_reports, patients
from .common import create_record, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([CareTeamWrite])
def patient_list(request):
    """
    GET: search/filter/paginate patients.
    Query params: page, limit, search (name/email/phone), gender, status, bloodGroup.
    POST: register a patient.
    """
    if request.method == 'POST':
        return create_record(request, patients)
    return list_response(request, patients)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([CareTeamWrite])
def patient_detail(request, pk: int):
    return record_detail(request, patients, pk)


def _patient_sublist(request, pk, collection):
    # 404 for an unknown patient rather than an empty page
    patients.repository.get_object(pk)
    return list_response(request, collection, patientId=pk)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_appointments(request, pk: int):
    return _patient_sublist(request, pk, appointments)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_admissions(request, pk: int):
    return _patient_sublist(request, pk, admissions)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_lab_reports(request, pk: int):
    return _patient_sublist(request, pk, lab_reports)
