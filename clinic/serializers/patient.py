from rest_framework import serializers

from clinic.models import Patient
from .common import CleanTextMixin


class PatientSerializer(CleanTextMixin, serializers.ModelSerializer):
    bloodGroup = serializers.CharField(source='blood_group', required=False, allow_blank=True, max_length=5)
    dateOfBirth = serializers.DateField(source='date_of_birth', required=False, allow_null=True)
    medicalHistory = serializers.CharField(source='medical_history', required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id', 'name', 'email', 'phone', 'gender', 'bloodGroup', 'address',
            'dateOfBirth', 'age', 'medicalHistory', 'status', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('name', 'address', 'medical_history')

    def validate_name(self, v):
        v = (v or '').strip()
        if len(v) < 2:
            raise serializers.ValidationError('name must be at least 2 characters')
        return v
