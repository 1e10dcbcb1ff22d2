"""
Billing reports: period overview, monthly revenue, overdue ageing and
insurance claim totals.

All functions accept ``today`` so reports can be computed for a fixed date.
"""
from __future__ import annotations

import calendar
import datetime
from decimal import Decimal
from typing import Any, Mapping

from django.conf import settings
from django.db.models import Count, Q, Sum
from django.db.models.functions import ExtractMonth
from django.utils import timezone

from clinic.listquery import ListSpec
from clinic.models import Bill
from clinic.serializers.billing import BillSerializer

ZERO = Decimal('0')
OPEN_STATUSES = ('pending', 'partial')
AGE_RANGES = ('0-30', '31-60', '61-90', '90+')

OVERDUE_SPEC = ListSpec.of(
    searchable=('invoiceNumber', 'patientName'),
    filters=('ageRange', 'department', 'insuranceStatus'),
)


def period_bounds(period: str, today: datetime.date) -> tuple[datetime.date, datetime.date]:
    """Inclusive date range covering ``period`` up to ``today``."""
    if period == 'today':
        return today, today
    if period == 'week':
        return today - datetime.timedelta(days=today.weekday()), today
    if period == 'year':
        return today.replace(month=1, day=1), today
    return today.replace(day=1), today


def age_range(days_overdue: int) -> str:
    if days_overdue <= 30:
        return '0-30'
    if days_overdue <= 60:
        return '31-60'
    if days_overdue <= 90:
        return '61-90'
    return '90+'


def _money(value) -> Decimal:
    return value if value is not None else ZERO


def overview(*, period: str = 'month', today=None) -> dict:
    today = today or timezone.localdate()
    start, end = period_bounds(period, today)
    bills = Bill.objects.filter(issue_date__range=(start, end)).exclude(status='cancelled')
    totals = bills.aggregate(count=Count('id'), billed=Sum('amount'), collected=Sum('paid_amount'))
    billed, collected = _money(totals['billed']), _money(totals['collected'])

    by_method = (bills.exclude(payment_method='').values('payment_method')
                 .annotate(count=Count('id'), amount=Sum('paid_amount'))
                 .order_by('payment_method'))
    open_bills = (Bill.objects.filter(status__in=OPEN_STATUSES).values('status')
                  .annotate(count=Count('id'), total=Sum('amount'), paid=Sum('paid_amount'))
                  .order_by('status'))
    recent = Bill.objects.select_related('patient').order_by('-issue_date', '-id')[:5]
    return {
        'period': period,
        'from': start,
        'to': end,
        'billCount': totals['count'],
        'billed': billed,
        'collected': collected,
        'outstanding': billed - collected,
        'paymentMethodBreakdown': [
            {'paymentMethod': r['payment_method'], 'count': r['count'], 'amount': _money(r['amount'])}
            for r in by_method
        ],
        'outstandingBills': [
            {
                'status': r['status'],
                'count': r['count'],
                'totalAmount': _money(r['total']),
                'outstandingAmount': _money(r['total']) - _money(r['paid']),
            }
            for r in open_bills
        ],
        'overdueBills': Bill.objects.filter(status__in=OPEN_STATUSES, due_date__lt=today).count(),
        'insuranceClaims': insurance_claims(),
        'recentTransactions': BillSerializer(recent, many=True).data,
    }


def monthly_revenue(*, year: int | None = None, today=None) -> dict:
    """Collected amount per calendar month of ``year`` (every month present, zero-filled)."""
    year = year or (today or timezone.localdate()).year
    rows = (Bill.objects.filter(issue_date__year=year).exclude(status='cancelled')
            .annotate(month=ExtractMonth('issue_date')).values('month')
            .annotate(revenue=Sum('paid_amount'), billed=Sum('amount'), count=Count('id'))
            .order_by('month'))
    by_month = {r['month']: r for r in rows}
    months = []
    for number in range(1, 13):
        row = by_month.get(number, {})
        months.append({
            'month': calendar.month_name[number],
            'period': f'{year}-{number:02d}',
            'revenue': _money(row.get('revenue')),
            'billed': _money(row.get('billed')),
            'count': row.get('count', 0),
        })
    return {
        'year': year,
        'monthlyRevenue': months,
        'totalRevenue': sum((m['revenue'] for m in months), ZERO),
    }


def overdue_snapshot(*, today=None) -> list[dict]:
    """Open bills past their due date, oldest due date first, tagged with their age bucket."""
    today = today or timezone.localdate()
    qs = (Bill.objects.filter(status__in=OPEN_STATUSES, due_date__lt=today)
          .select_related('patient').order_by('due_date', 'id'))
    records = []
    for bill, data in zip(qs, BillSerializer(qs, many=True).data):
        days = (today - bill.due_date).days
        records.append({**data, 'daysOverdue': days, 'ageRange': age_range(days)})
    return records


def overdue(params: Mapping[str, Any], *, today=None) -> dict:
    snapshot = overdue_snapshot(today=today)
    query = OVERDUE_SPEC.parse(
        params,
        default_page_size=settings.LIST_DEFAULT_PAGE_SIZE,
        max_page_size=settings.LIST_MAX_PAGE_SIZE,
    )
    payload = OVERDUE_SPEC.evaluate(snapshot, query).as_payload()

    buckets = {name: {'range': name, 'count': 0, 'amount': ZERO} for name in AGE_RANGES}
    for record in snapshot:
        bucket = buckets[record['ageRange']]
        bucket['count'] += 1
        bucket['amount'] += Decimal(str(record['outstandingAmount']))
    payload['summary'] = {
        'totalBills': len(snapshot),
        'totalAmount': sum((b['amount'] for b in buckets.values()), ZERO),
        'overdueByAge': list(buckets.values()),
    }
    return payload


def insurance_claims() -> list[dict]:
    rows = (Bill.objects.exclude(insurance_status='none').values('insurance_status')
            .annotate(count=Count('id'), amount=Sum('amount'))
            .order_by('insurance_status'))
    return [{'status': r['insurance_status'], 'count': r['count'], 'amount': _money(r['amount'])} for r in rows]


def insurance_summary() -> dict:
    claims = insurance_claims()
    providers = (Bill.objects.exclude(insurance_status='none').exclude(insurance_provider='')
                 .values('insurance_provider')
                 .annotate(count=Count('id'), amount=Sum('amount'),
                           approved=Count('id', filter=Q(insurance_status='approved')))
                 .order_by('insurance_provider'))
    return {
        'claims': claims,
        'totalClaims': sum(c['count'] for c in claims),
        'totalAmount': sum((c['amount'] for c in claims), ZERO),
        'byProvider': [
            {'provider': r['insurance_provider'], 'count': r['count'], 'approved': r['approved'],
             'amount': _money(r['amount'])}
            for r in providers
        ],
    }
