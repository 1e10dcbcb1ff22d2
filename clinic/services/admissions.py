from __future__ import annotations

import structlog
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from clinic.models import Admission
from clinic.serializers.admission import AdmissionSerializer
from clinic.services.records import admissions

logger = structlog.get_logger(__name__)


@transaction.atomic
def discharge(pk, *, discharge_date=None, notes: str = '', summary: str = '', today=None) -> dict:
    """Close an active admission.

    The discharge date defaults to ``today`` and may not precede the
    admission date.  Discharging twice is rejected.
    """
    admission = admissions.repository.get_object(pk)
    if admission.status == Admission.STATUS_DISCHARGED:
        raise ValidationError({'status': 'admission already discharged'})

    discharge_date = discharge_date or today or timezone.localdate()
    if discharge_date < admission.admission_date:
        raise ValidationError({'dischargeDate': 'discharge date precedes admission date'})

    admission.status = Admission.STATUS_DISCHARGED
    admission.discharge_date = discharge_date
    admission.discharge_notes = notes
    admission.discharge_summary = summary
    admission.save(update_fields=['status', 'discharge_date', 'discharge_notes', 'discharge_summary', 'updated_at'])
    logger.info('admission_discharged', id=admission.pk, discharge_date=discharge_date.isoformat())
    return AdmissionSerializer(admission).data
