import datetime
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from clinic.models import Bill, Patient
from clinic.services import finance

pytestmark = pytest.mark.django_db

TODAY = datetime.date(2024, 6, 30)


@pytest.fixture
def patient():
    return Patient.objects.create(name='Robert Brown')


def make_bill(patient, number, *, amount='1000.00', paid='0.00', status='pending', issued, due_days=30, **extra):
    issued_on = TODAY - datetime.timedelta(days=issued)
    return Bill.objects.create(
        invoice_number=number, patient=patient, amount=Decimal(amount), paid_amount=Decimal(paid),
        status=status, issue_date=issued_on, due_date=issued_on + datetime.timedelta(days=due_days), **extra,
    )


def test_age_range_buckets():
    assert [finance.age_range(d) for d in (1, 30, 31, 60, 61, 90, 91, 400)] == \
        ['0-30', '0-30', '31-60', '31-60', '61-90', '61-90', '90+', '90+']


def test_period_bounds():
    assert finance.period_bounds('today', TODAY) == (TODAY, TODAY)
    assert finance.period_bounds('week', TODAY) == (datetime.date(2024, 6, 24), TODAY)
    assert finance.period_bounds('month', TODAY) == (datetime.date(2024, 6, 1), TODAY)
    assert finance.period_bounds('year', TODAY) == (datetime.date(2024, 1, 1), TODAY)


def test_bill_creation_sets_invoice_number_and_status(make_client, patient):
    client = make_client('admin')
    resp = client.post(reverse('bill_list'), {
        'patientId': patient.id, 'amount': '500.00', 'paidAmount': '500.00', 'paymentMethod': 'card',
        'issueDate': '2024-06-01', 'dueDate': '2024-07-01', 'description': 'Consultation',
    }, format='json')
    assert resp.status_code == 201
    data = resp.data['data']
    assert data['invoiceNumber'].startswith('INV-')
    assert data['status'] == 'paid'
    assert data['paidAt'] is not None
    assert data['outstandingAmount'] == 0

    resp = client.post(reverse('bill_list'), {
        'patientId': patient.id, 'amount': '500.00', 'paidAmount': '200.00',
        'issueDate': '2024-06-01', 'dueDate': '2024-07-01',
    }, format='json')
    assert resp.data['data']['status'] == 'partial'
    assert resp.data['data']['outstandingAmount'] == Decimal('300.00')


def test_bill_validation(make_client, patient):
    client = make_client('admin')
    resp = client.post(reverse('bill_list'), {
        'patientId': patient.id, 'amount': '100.00', 'paidAmount': '150.00',
        'issueDate': '2024-06-01', 'dueDate': '2024-05-01',
    }, format='json')
    assert resp.status_code == 400
    assert 'paidAmount' in resp.data['error']['details']


def test_financial_endpoints_are_admin_only(make_client):
    client = make_client('doctor')
    for name in ('bill_list', 'financial_overview', 'financial_revenue', 'financial_overdue',
                 'financial_insurance'):
        assert client.get(reverse(name)).status_code == 403, name


def test_bill_list_filters(make_client, patient):
    make_bill(patient, 'INV-1', issued=10, payment_method='cash')
    make_bill(patient, 'INV-2', issued=5, status='paid', paid='1000.00', payment_method='insurance',
              insurance_status='approved', insurance_provider='BlueShield')
    client = make_client('admin')
    resp = client.get(reverse('bill_list'), {'paymentMethod': 'insurance'})
    assert [b['invoiceNumber'] for b in resp.data['data']] == ['INV-2']
    resp = client.get(reverse('bill_list'), {'search': 'inv-1'})
    assert [b['invoiceNumber'] for b in resp.data['data']] == ['INV-1']


def test_overdue_snapshot_and_buckets(patient):
    make_bill(patient, 'INV-A', issued=40)                       # 10 days overdue
    make_bill(patient, 'INV-B', issued=80, paid='400.00', status='partial')  # 50 days
    make_bill(patient, 'INV-C', issued=100)                      # 70 days
    make_bill(patient, 'INV-D', issued=200)                      # 170 days
    make_bill(patient, 'INV-E', issued=200, status='paid', paid='1000.00')
    make_bill(patient, 'INV-F', issued=10)                       # not yet due

    snapshot = finance.overdue_snapshot(today=TODAY)
    assert [b['invoiceNumber'] for b in snapshot] == ['INV-D', 'INV-C', 'INV-B', 'INV-A']
    assert [b['ageRange'] for b in snapshot] == ['90+', '61-90', '31-60', '0-30']
    assert snapshot[0]['daysOverdue'] == 170

    payload = finance.overdue({'ageRange': '31-60'}, today=TODAY)
    assert [b['invoiceNumber'] for b in payload['data']] == ['INV-B']
    assert payload['pagination']['total'] == 1
    summary = payload['summary']
    assert summary['totalBills'] == 4
    assert summary['totalAmount'] == Decimal('3600.00')
    assert [(b['range'], b['count']) for b in summary['overdueByAge']] == \
        [('0-30', 1), ('31-60', 1), ('61-90', 1), ('90+', 1)]


def test_overdue_endpoint_paginates(make_client, patient):
    today = timezone.localdate()
    for i in range(3):
        Bill.objects.create(invoice_number=f'INV-OD-{i}', patient=patient, amount=Decimal('10.00'),
                            issue_date=today - datetime.timedelta(days=60), due_date=today - datetime.timedelta(days=30 + i))
    resp = make_client('admin').get(reverse('financial_overdue'), {'limit': 2, 'page': 2})
    assert resp.status_code == 200
    assert len(resp.data['data']) == 1
    assert resp.data['pagination'] == {'total': 3, 'page': 2, 'pageSize': 2, 'totalPages': 2}
    assert resp.data['summary']['totalBills'] == 3


def test_overview_for_month(patient):
    make_bill(patient, 'INV-1', issued=0, status='paid', paid='1000.00', payment_method='card')
    make_bill(patient, 'INV-2', issued=3, paid='250.00', status='partial', payment_method='cash')
    make_bill(patient, 'INV-3', issued=45)
    data = finance.overview(period='month', today=TODAY)
    assert data['billCount'] == 2
    assert data['billed'] == Decimal('2000.00')
    assert data['collected'] == Decimal('1250.00')
    assert data['outstanding'] == Decimal('750.00')
    assert {m['paymentMethod'] for m in data['paymentMethodBreakdown']} == {'card', 'cash'}
    assert data['overdueBills'] == 1
    assert [r['invoiceNumber'] for r in data['recentTransactions']][:2] == ['INV-1', 'INV-2']


def test_monthly_revenue_is_zero_filled(patient):
    make_bill(patient, 'INV-1', issued=0, status='paid', paid='1000.00')          # June
    make_bill(patient, 'INV-2', issued=40, paid='300.00', status='partial')       # May
    data = finance.monthly_revenue(year=2024)
    assert len(data['monthlyRevenue']) == 12
    assert data['monthlyRevenue'][5] == {'month': 'June', 'period': '2024-06', 'revenue': Decimal('1000.00'),
                                         'billed': Decimal('1000.00'), 'count': 1}
    assert data['monthlyRevenue'][4]['revenue'] == Decimal('300.00')
    assert data['monthlyRevenue'][0]['revenue'] == 0
    assert data['totalRevenue'] == Decimal('1300.00')


def test_insurance_summary(patient):
    make_bill(patient, 'INV-1', issued=1, insurance_status='submitted', insurance_provider='BlueShield')
    make_bill(patient, 'INV-2', issued=1, insurance_status='approved', insurance_provider='BlueShield')
    make_bill(patient, 'INV-3', issued=1)
    data = finance.insurance_summary()
    assert data['totalClaims'] == 2
    assert data['totalAmount'] == Decimal('2000.00')
    assert data['byProvider'] == [{'provider': 'BlueShield', 'count': 2, 'approved': 1,
                                   'amount': Decimal('2000.00')}]
