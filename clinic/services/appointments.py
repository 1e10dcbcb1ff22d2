from django.utils import timezone

from clinic.models import Appointment
from clinic.serializers.appointment import AppointmentSerializer
from clinic.services.records import appointments


def todays_appointments(*, today=None) -> list[dict]:
    """Appointments booked for ``today`` in chronological order."""
    today = today or timezone.localdate()
    qs = (Appointment.objects.filter(date=today)
          .select_related('patient', 'doctor')
          .order_by('time', 'id'))
    return AppointmentSerializer(qs, many=True).data


def recent_appointments(*, limit: int = 5) -> list[dict]:
    qs = (Appointment.objects.select_related('patient', 'doctor')
          .order_by('-date', '-time', '-id')[:limit])
    return AppointmentSerializer(qs, many=True).data


def set_status(pk, status: str) -> dict:
    return appointments.repository.update(pk, {'status': status})
