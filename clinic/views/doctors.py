from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import AdminWrite
from clinic.services.records import appointments, doctors, lab_reports
from .common import create_record, list_response, record_detail


@api_view(['GET', 'POST'])
@permission_classes([AdminWrite])
def doctor_list(request):
    """
    GET: search/filter/paginate doctors.
    Query params: page, limit, search (name/specialization/email), specialization.
    """
    if request.method == 'POST':
        return create_record(request, doctors)
    return list_response(request, doctors)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([AdminWrite])
def doctor_detail(request, pk: int):
    return record_detail(request, doctors, pk)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctors_by_specialization(request, name: str):
    return list_response(request, doctors, specialization=name)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_appointments(request, pk: int):
    doctors.repository.get_object(pk)
    return list_response(request, appointments, doctorId=pk)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_lab_reports(request, pk: int):
    doctors.repository.get_object(pk)
    return list_response(request, lab_reports, doctorId=pk)
