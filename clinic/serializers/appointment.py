from rest_framework import serializers

from clinic.models import Appointment, Doctor, Patient
from .common import CleanTextMixin


class AppointmentSerializer(CleanTextMixin, serializers.ModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    patientName = serializers.CharField(source='patient.name', read_only=True)
    doctorId = serializers.PrimaryKeyRelatedField(source='doctor', queryset=Doctor.objects.all())
    doctorName = serializers.CharField(source='doctor.name', read_only=True)
    time = serializers.TimeField(format='%H:%M', input_formats=['%H:%M', '%H:%M:%S'])
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'patientId', 'patientName', 'doctorId', 'doctorName', 'date', 'time',
            'duration', 'type', 'status', 'symptoms', 'notes', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('symptoms', 'notes')

    def validate_duration(self, v):
        if v is not None and v < 5:
            raise serializers.ValidationError('duration must be at least 5 minutes')
        return v


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c for c, _ in Appointment.STATUS_CHOICES])
