from rest_framework import serializers

from clinic.models import Doctor
from .common import CleanTextMixin

WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']


class DoctorSerializer(CleanTextMixin, serializers.ModelSerializer):
    availableHours = serializers.CharField(source='available_hours', required=False, allow_blank=True, max_length=64)
    availableDays = serializers.ListField(
        source='available_days', child=serializers.ChoiceField(choices=WEEKDAYS), required=False,
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Doctor
        fields = [
            'id', 'name', 'email', 'specialization', 'experience', 'qualifications', 'phone',
            'address', 'availableHours', 'availableDays', 'photo', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('name', 'qualifications', 'address')
