from rest_framework import serializers

from clinic.models import Medicine
from .common import CleanTextMixin, LimitParamsSerializer


class MedicineSerializer(CleanTextMixin, serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    expiryDate = serializers.DateField(source='expiry_date', required=False, allow_null=True)
    sideEffects = serializers.CharField(source='side_effects', required=False, allow_blank=True)
    prescriptionRequired = serializers.BooleanField(source='prescription_required', required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Medicine
        fields = [
            'id', 'name', 'description', 'category', 'manufacturer', 'price', 'stock', 'dosage',
            'expiryDate', 'sideEffects', 'prescriptionRequired', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('name', 'description', 'side_effects')


class StockAdjustSerializer(serializers.Serializer):
    stockDelta = serializers.IntegerField()


class ExpiringParamsSerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, min_value=0, max_value=3650, default=30)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=10)


class LowStockParamsSerializer(LimitParamsSerializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=10)
