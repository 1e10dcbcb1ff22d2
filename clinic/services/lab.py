from __future__ import annotations

import structlog
from django.conf import settings
from django.db.models import Count
from rest_framework.exceptions import ValidationError

from clinic.models import LabReport
from clinic.serializers.lab import LabReportSerializer
from clinic.services.records import lab_reports

logger = structlog.get_logger(__name__)


def set_status(pk, status: str) -> dict:
    return lab_reports.repository.update(pk, {'status': status})


def recent_reports(*, limit: int = 5) -> list[dict]:
    qs = LabReport.objects.select_related('patient', 'doctor').order_by('-test_date', '-id')[:limit]
    return LabReportSerializer(qs, many=True).data


def attach_file(pk, upload) -> dict:
    """Store ``upload`` as the report's attachment after size/type checks."""
    report = lab_reports.repository.get_object(pk)
    max_bytes = settings.UPLOAD_MAX_MB * 1024 * 1024
    if upload.size > max_bytes:
        raise ValidationError({'file': f'file exceeds {settings.UPLOAD_MAX_MB} MB'})
    content_type = getattr(upload, 'content_type', '') or ''
    if not any(content_type.startswith(t.strip()) for t in settings.ALLOWED_UPLOAD_TYPES if t.strip()):
        raise ValidationError({'file': f'unsupported file type: {content_type or "unknown"}'})

    if report.attachment:
        report.attachment.delete(save=False)
    report.attachment.save(upload.name, upload, save=False)
    report.attachment_content_type = content_type
    report.save(update_fields=['attachment', 'attachment_content_type', 'updated_at'])
    logger.info('lab_attachment_saved', id=report.pk, content_type=content_type, size=upload.size)
    return LabReportSerializer(report).data


def stats() -> dict:
    by_status = dict(LabReport.objects.values_list('status').annotate(n=Count('id')).order_by())
    by_type = (LabReport.objects.values('test_type')
               .annotate(count=Count('id'))
               .order_by('-count', 'test_type'))
    return {
        'total': sum(by_status.values()),
        'pending': by_status.get('pending', 0),
        'inProgress': by_status.get('in-progress', 0),
        'completed': by_status.get('completed', 0),
        'cancelled': by_status.get('cancelled', 0),
        'byTestType': [{'testType': row['test_type'], 'count': row['count']} for row in by_type],
    }
