from rest_framework import serializers

from clinic.models import Admission, Doctor, Patient
from .common import CleanTextMixin


class AdmissionSerializer(CleanTextMixin, serializers.ModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    patientName = serializers.CharField(source='patient.name', read_only=True)
    doctorId = serializers.PrimaryKeyRelatedField(source='doctor', queryset=Doctor.objects.all())
    doctorName = serializers.CharField(source='doctor.name', read_only=True)
    roomNumber = serializers.CharField(source='room_number', max_length=20)
    wardType = serializers.ChoiceField(source='ward_type', choices=Admission.WARD_CHOICES, required=False)
    admissionDate = serializers.DateField(source='admission_date')
    dischargeDate = serializers.DateField(source='discharge_date', required=False, allow_null=True)
    reasonForAdmission = serializers.CharField(source='reason_for_admission', max_length=255)
    treatmentPlan = serializers.CharField(source='treatment_plan', required=False, allow_blank=True)
    dischargeNotes = serializers.CharField(source='discharge_notes', required=False, allow_blank=True)
    dischargeSummary = serializers.CharField(source='discharge_summary', required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Admission
        fields = [
            'id', 'patientId', 'patientName', 'doctorId', 'doctorName', 'roomNumber', 'wardType',
            'admissionDate', 'dischargeDate', 'reasonForAdmission', 'diagnosis', 'treatmentPlan',
            'status', 'notes', 'dischargeNotes', 'dischargeSummary', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('reason_for_admission', 'diagnosis', 'treatment_plan', 'notes',
                        'discharge_notes', 'discharge_summary')

    def validate(self, attrs):
        attrs = super().validate(attrs)
        admitted = attrs.get('admission_date') or getattr(self.instance, 'admission_date', None)
        discharged = attrs.get('discharge_date')
        if admitted and discharged and discharged < admitted:
            raise serializers.ValidationError({'dischargeDate': 'discharge date precedes admission date'})
        return attrs


class DischargeSerializer(serializers.Serializer):
    dischargeDate = serializers.DateField(required=False, allow_null=True)
    dischargeNotes = serializers.CharField(required=False, allow_blank=True, default='')
    dischargeSummary = serializers.CharField(required=False, allow_blank=True, default='')
