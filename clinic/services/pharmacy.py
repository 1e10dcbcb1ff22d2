"""
Pharmacy inventory: stock adjustments and the stock/expiry reports.
"""
from __future__ import annotations

import datetime
from decimal import Decimal

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from clinic.models import Medicine
from clinic.serializers.pharmacy import MedicineSerializer
from clinic.services.records import medicines

logger = structlog.get_logger(__name__)


@transaction.atomic
def adjust_stock(pk, delta: int) -> dict:
    """Add ``delta`` (negative to dispense) to a medicine's stock."""
    medicine = medicines.repository.get_object(pk)
    # row lock so concurrent dispensing cannot oversell
    medicine = Medicine.objects.select_for_update().get(pk=medicine.pk)
    new_stock = medicine.stock + delta
    if new_stock < 0:
        raise ValidationError({'stockDelta': f'insufficient stock: {medicine.stock} available'})
    medicine.stock = new_stock
    medicine.save(update_fields=['stock', 'updated_at'])
    logger.info('stock_adjusted', id=medicine.pk, delta=delta, stock=new_stock)
    return MedicineSerializer(medicine).data


def low_stock(*, limit: int | None = None, threshold: int | None = None) -> list[dict]:
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    qs = Medicine.objects.filter(stock__lt=threshold).order_by('stock', 'name', 'id')
    if limit:
        qs = qs[:limit]
    return MedicineSerializer(qs, many=True).data


def expiring(*, days: int = 30, limit: int = 10, today=None) -> list[dict]:
    """Medicines expiring within ``days`` from ``today`` (already expired ones excluded)."""
    today = today or timezone.localdate()
    qs = (Medicine.objects
          .filter(expiry_date__gte=today, expiry_date__lte=today + datetime.timedelta(days=days))
          .order_by('expiry_date', 'name', 'id')[:limit])
    return MedicineSerializer(qs, many=True).data


def stats(*, today=None) -> dict:
    today = today or timezone.localdate()
    threshold = settings.LOW_STOCK_THRESHOLD
    value = ExpressionWrapper(F('price') * F('stock'), output_field=DecimalField(max_digits=14, decimal_places=2))
    totals = Medicine.objects.aggregate(
        total=Count('id'),
        units=Sum('stock'),
        inventory_value=Sum(value),
    )
    by_category = (Medicine.objects.values('category')
                   .annotate(count=Count('id'), stock=Sum('stock'))
                   .order_by('category'))
    return {
        'totalMedicines': totals['total'],
        'totalStock': totals['units'] or 0,
        'inventoryValue': totals['inventory_value'] or Decimal('0'),
        'lowStock': Medicine.objects.filter(stock__lt=threshold).count(),
        'outOfStock': Medicine.objects.filter(stock=0).count(),
        'expiringSoon': Medicine.objects.filter(
            expiry_date__gte=today, expiry_date__lte=today + datetime.timedelta(days=30)).count(),
        'expired': Medicine.objects.filter(expiry_date__lt=today).count(),
        'lowStockThreshold': threshold,
        'byCategory': [
            {'category': row['category'], 'count': row['count'], 'stock': row['stock'] or 0}
            for row in by_category
        ],
    }
