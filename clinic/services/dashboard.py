from django.conf import settings
from django.utils import timezone

from clinic.models import Admission, Appointment, Doctor, LabReport, Medicine, Patient


def statistics(*, today=None) -> dict:
    """Head-line counters for the landing dashboard."""
    today = today or timezone.localdate()
    return {
        'totalPatients': Patient.objects.count(),
        'totalDoctors': Doctor.objects.count(),
        'totalAppointments': Appointment.objects.count(),
        'todayAppointments': Appointment.objects.filter(date=today).count(),
        'activeAdmissions': Admission.objects.filter(status=Admission.STATUS_ACTIVE).count(),
        'pendingLabReports': LabReport.objects.filter(status='pending').count(),
        'lowStockMedicines': Medicine.objects.filter(stock__lt=settings.LOW_STOCK_THRESHOLD).count(),
    }
