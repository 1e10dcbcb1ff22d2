import uuid

from django.utils import timezone
from rest_framework import serializers

from clinic.models import Bill, Patient
from .common import CleanTextMixin


def next_invoice_number() -> str:
    return f"INV-{timezone.localdate():%Y%m%d}-{uuid.uuid4().hex[:6].upper()}"


class BillSerializer(CleanTextMixin, serializers.ModelSerializer):
    invoiceNumber = serializers.CharField(source='invoice_number', max_length=32, required=False)
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    patientName = serializers.CharField(source='patient.name', read_only=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    paidAmount = serializers.DecimalField(source='paid_amount', max_digits=12, decimal_places=2, min_value=0,
                                          required=False)
    outstandingAmount = serializers.DecimalField(source='outstanding_amount', max_digits=12, decimal_places=2,
                                                 read_only=True)
    paymentMethod = serializers.ChoiceField(source='payment_method', choices=Bill.PAYMENT_CHOICES,
                                            required=False, allow_blank=True)
    insuranceProvider = serializers.CharField(source='insurance_provider', required=False, allow_blank=True,
                                              max_length=100)
    insuranceStatus = serializers.ChoiceField(source='insurance_status', choices=Bill.INSURANCE_CHOICES,
                                              required=False)
    issueDate = serializers.DateField(source='issue_date')
    dueDate = serializers.DateField(source='due_date')
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Bill
        fields = [
            'id', 'invoiceNumber', 'patientId', 'patientName', 'department', 'description', 'amount',
            'paidAmount', 'outstandingAmount', 'status', 'paymentMethod', 'insuranceProvider',
            'insuranceStatus', 'issueDate', 'dueDate', 'paidAt', 'createdAt', 'updatedAt',
        ]
        clean_fields = ('description',)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        amount = attrs.get('amount', getattr(self.instance, 'amount', None))
        paid = attrs.get('paid_amount', getattr(self.instance, 'paid_amount', 0)) or 0
        if amount is not None and paid > amount:
            raise serializers.ValidationError({'paidAmount': 'paid amount exceeds bill amount'})
        issued = attrs.get('issue_date', getattr(self.instance, 'issue_date', None))
        due = attrs.get('due_date', getattr(self.instance, 'due_date', None))
        if issued and due and due < issued:
            raise serializers.ValidationError({'dueDate': 'due date precedes issue date'})
        if amount is not None and paid == amount and amount > 0:
            attrs['status'] = 'paid'
        elif paid and 'status' not in attrs:
            attrs['status'] = 'partial'
        return attrs

    def create(self, validated_data):
        validated_data.setdefault('invoice_number', next_invoice_number())
        if validated_data.get('status') == 'paid':
            validated_data.setdefault('paid_at', timezone.now())
        return super().create(validated_data)

    def update(self, instance, validated_data):
        if validated_data.get('status') == 'paid' and not instance.paid_at:
            validated_data['paid_at'] = timezone.now()
        return super().update(instance, validated_data)


class PeriodParamsSerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=['today', 'week', 'month', 'year'], required=False, default='month')


class YearParamsSerializer(serializers.Serializer):
    year = serializers.IntegerField(required=False, min_value=2000, max_value=2100)
