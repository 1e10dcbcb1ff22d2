from rest_framework import serializers

from clinic.models import Doctor, LabReport, Patient
from .common import CleanTextMixin


class LabReportSerializer(CleanTextMixin, serializers.ModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    patientName = serializers.CharField(source='patient.name', read_only=True)
    doctorId = serializers.PrimaryKeyRelatedField(
        source='doctor', queryset=Doctor.objects.all(), required=False, allow_null=True,
    )
    doctorName = serializers.SerializerMethodField()
    testName = serializers.CharField(source='test_name', max_length=255)
    testType = serializers.CharField(source='test_type', max_length=100)
    testDate = serializers.DateField(source='test_date')
    normalRange = serializers.CharField(source='normal_range', required=False, allow_blank=True, max_length=255)
    attachment = serializers.FileField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = LabReport
        fields = [
            'id', 'patientId', 'patientName', 'doctorId', 'doctorName', 'testName', 'testType',
            'testDate', 'results', 'normalRange', 'status', 'notes', 'attachment',
            'createdAt', 'updatedAt',
        ]
        clean_fields = ('test_name', 'results', 'notes')

    def get_doctorName(self, obj):
        return obj.doctor.name if obj.doctor_id else None


class LabStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c for c, _ in LabReport.STATUS_CHOICES])
