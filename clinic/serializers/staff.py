from rest_framework import serializers

from clinic.models import StaffMember
from .common import CleanTextMixin


class StaffMemberSerializer(CleanTextMixin, serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    name = serializers.CharField(source='full_name', read_only=True)
    isActive = serializers.BooleanField(source='is_active', required=False)
    hireDate = serializers.DateField(source='hire_date', required=False, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = StaffMember
        fields = [
            'id', 'firstName', 'lastName', 'name', 'email', 'phone', 'role', 'position',
            'department', 'shift', 'isActive', 'hireDate', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('first_name', 'last_name', 'position', 'department')
