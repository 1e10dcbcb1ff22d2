import datetime
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from clinic.models import Admission, Appointment, Doctor, LabReport, Medicine, Patient, StaffMember
from clinic.services import admissions as admission_service
from clinic.services import pharmacy

pytestmark = pytest.mark.django_db


@pytest.fixture
def patient():
    return Patient.objects.create(name='David Lee', gender='Male')


@pytest.fixture
def doctor():
    return Doctor.objects.create(name='Dr. Robert Williams', specialization='Orthopedics')


@pytest.fixture
def admission(patient, doctor):
    return Admission.objects.create(patient=patient, doctor=doctor, room_number='204', ward_type='Private',
                                    admission_date=datetime.date(2024, 5, 1),
                                    reason_for_admission='Post-operative observation')


# -- admissions ---------------------------------------------------------------

def test_nurse_cannot_admit(make_client, patient, doctor):
    payload = {'patientId': patient.id, 'doctorId': doctor.id, 'roomNumber': '101',
               'admissionDate': '2024-05-01', 'reasonForAdmission': 'Fracture'}
    assert make_client('nurse').post(reverse('admission_list'), payload, format='json').status_code == 403
    resp = make_client('doctor').post(reverse('admission_list'), payload, format='json')
    assert resp.status_code == 201
    assert resp.data['data']['status'] == 'Active'
    assert resp.data['data']['wardType'] == 'General'


def test_admission_list_filters(make_client, admission, patient, doctor):
    Admission.objects.create(patient=patient, doctor=doctor, room_number='ICU-1', ward_type='ICU',
                             admission_date=datetime.date(2024, 4, 1), reason_for_admission='Sepsis',
                             status=Admission.STATUS_DISCHARGED)
    client = make_client('nurse')
    resp = client.get(reverse('admission_list'), {'wardType': 'ICU'})
    assert [a['roomNumber'] for a in resp.data['data']] == ['ICU-1']
    resp = client.get(reverse('admission_list'), {'search': 'post-OP'})
    assert [a['id'] for a in resp.data['data']] == [admission.id]
    resp = client.get(reverse('patient_admissions', args=[patient.id]), {'status': 'Active'})
    assert resp.data['pagination']['total'] == 1


def test_discharge_defaults_to_today(make_client, admission):
    resp = make_client('doctor').put(reverse('admission_discharge', args=[admission.id]),
                                     {'dischargeNotes': 'Stable', 'dischargeSummary': 'Recovered'},
                                     format='json')
    assert resp.status_code == 200
    assert resp.data['data']['status'] == 'Discharged'
    assert resp.data['data']['dischargeDate'] == timezone.localdate().isoformat()
    admission.refresh_from_db()
    assert admission.discharge_summary == 'Recovered'


def test_discharge_rules(admission):
    with pytest.raises(ValidationError) as exc:
        admission_service.discharge(admission.id, discharge_date=datetime.date(2024, 4, 1))
    assert 'dischargeDate' in exc.value.detail

    admission_service.discharge(admission.id, today=datetime.date(2024, 5, 9))
    admission.refresh_from_db()
    assert admission.discharge_date == datetime.date(2024, 5, 9)
    with pytest.raises(ValidationError) as exc:
        admission_service.discharge(admission.id)
    assert 'status' in exc.value.detail


# -- pharmacy -----------------------------------------------------------------

@pytest.fixture
def medicines():
    today = timezone.localdate()
    return [
        Medicine.objects.create(name='Amoxicillin', category='Antibiotics', price=Decimal('12.99'), stock=120,
                                expiry_date=today + datetime.timedelta(days=400), prescription_required=True),
        Medicine.objects.create(name='Ibuprofen', category='Analgesics', price=Decimal('8.50'), stock=5,
                                expiry_date=today + datetime.timedelta(days=10)),
        Medicine.objects.create(name='Albuterol Inhaler', category='Respiratory', price=Decimal('24.99'),
                                stock=0, expiry_date=today - datetime.timedelta(days=1),
                                prescription_required=True),
    ]


def test_medicine_list_filters_on_prescription(make_client, medicines):
    client = make_client('nurse')
    resp = client.get(reverse('medicine_list'), {'requiresPrescription': 'true'})
    assert sorted(m['name'] for m in resp.data['data']) == ['Albuterol Inhaler', 'Amoxicillin']
    resp = client.get(reverse('medicines_by_category', args=['Analgesics']))
    assert [m['name'] for m in resp.data['data']] == ['Ibuprofen']


def test_only_admin_manages_catalogue(make_client):
    payload = {'name': 'Cetirizine', 'category': 'Antihistamines', 'price': '9.99', 'stock': 150}
    assert make_client('doctor').post(reverse('medicine_list'), payload, format='json').status_code == 403
    resp = make_client('admin').post(reverse('medicine_list'), payload, format='json')
    assert resp.status_code == 201
    assert resp.data['data']['price'] == Decimal('9.99')
    assert resp.data['data']['prescriptionRequired'] is False


def test_stock_adjustment_never_goes_negative(make_client, medicines):
    client = make_client('admin')
    url = reverse('medicine_stock', args=[medicines[1].id])
    resp = client.patch(url, {'stockDelta': -5}, format='json')
    assert resp.status_code == 200
    assert resp.data['data']['stock'] == 0
    resp = client.patch(url, {'stockDelta': -1}, format='json')
    assert resp.status_code == 400
    assert 'stockDelta' in resp.data['error']['details']
    medicines[1].refresh_from_db()
    assert medicines[1].stock == 0


def test_low_stock_and_expiring(make_client, medicines):
    client = make_client('nurse')
    resp = client.get(reverse('medicines_low_stock'))
    assert [m['name'] for m in resp.data['data']] == ['Albuterol Inhaler', 'Ibuprofen']
    resp = client.get(reverse('medicines_expiring'), {'days': 30})
    assert [m['name'] for m in resp.data['data']] == ['Ibuprofen']


def test_low_stock_limit_is_validated(make_client, medicines):
    client = make_client('admin')
    resp = client.get(reverse('medicines_low_stock'), {'limit': 1})
    assert [m['name'] for m in resp.data['data']] == ['Albuterol Inhaler']
    for bad in ('-3', '0', 'abc'):
        resp = client.get(reverse('medicines_low_stock'), {'limit': bad})
        assert resp.status_code == 400
        assert resp.data['error']['code'] == 'validation_error'
        assert 'limit' in resp.data['error']['details']


def test_pharmacy_stats(medicines):
    data = pharmacy.stats()
    assert data['totalMedicines'] == 3
    assert data['totalStock'] == 125
    assert data['lowStock'] == 2
    assert data['outOfStock'] == 1
    assert data['expiringSoon'] == 1
    assert data['expired'] == 1
    assert data['inventoryValue'] == Decimal('12.99') * 120 + Decimal('8.50') * 5
    assert {c['category'] for c in data['byCategory']} == {'Antibiotics', 'Analgesics', 'Respiratory'}


# -- lab reports --------------------------------------------------------------

@pytest.fixture
def report(patient, doctor):
    return LabReport.objects.create(patient=patient, doctor=doctor, test_name='Lumbar Spine MRI',
                                    test_type='MRI', test_date=datetime.date(2024, 6, 28))


def test_lab_report_list_and_status(make_client, report, patient):
    LabReport.objects.create(patient=patient, test_name='Complete Blood Count', test_type='Blood Test',
                             test_date=datetime.date(2024, 6, 15), status='completed')
    nurse = make_client('nurse')
    resp = nurse.get(reverse('lab_report_list'), {'testType': 'MRI'})
    assert [r['id'] for r in resp.data['data']] == [report.id]
    assert resp.data['data'][0]['doctorName'] == 'Dr. Robert Williams'

    resp = nurse.get(reverse('lab_report_list'), {'search': 'david'})
    assert resp.data['pagination']['total'] == 2

    assert nurse.post(reverse('lab_report_list'), {}, format='json').status_code == 403
    resp = nurse.patch(reverse('lab_report_status', args=[report.id]), {'status': 'in-progress'}, format='json')
    assert resp.status_code == 200
    assert resp.data['data']['status'] == 'in-progress'


def test_lab_stats_and_recent(make_client, report, patient):
    LabReport.objects.create(patient=patient, test_name='Chest X-Ray', test_type='X-Ray',
                             test_date=datetime.date(2024, 6, 30), status='completed')
    client = make_client('doctor')
    stats = client.get(reverse('lab_report_stats')).data['data']
    assert (stats['total'], stats['pending'], stats['completed']) == (2, 1, 1)
    recent = client.get(reverse('lab_report_recent'), {'limit': 1}).data['data']
    assert [r['testName'] for r in recent] == ['Chest X-Ray']


def test_lab_attachment_upload(make_client, report, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    client = make_client('doctor')
    url = reverse('lab_report_attachment', args=[report.id])

    pdf = SimpleUploadedFile('mri.pdf', b'%PDF-1.4 test', content_type='application/pdf')
    resp = client.post(url, {'file': pdf}, format='multipart')
    assert resp.status_code == 200
    report.refresh_from_db()
    assert report.attachment.name.startswith('lab-reports/')
    assert report.attachment_content_type == 'application/pdf'

    exe = SimpleUploadedFile('x.exe', b'MZ', content_type='application/x-msdownload')
    assert client.post(url, {'file': exe}, format='multipart').status_code == 400
    assert client.post(url, {}, format='multipart').status_code == 400


# -- staff & dashboard ----------------------------------------------------------

def test_staff_departments(make_client):
    StaffMember.objects.create(first_name='Maria', last_name='Garcia', role='nurse', department='Emergency')
    StaffMember.objects.create(first_name='Tom', last_name='Baker', role='nurse', department='Emergency',
                               shift='night', is_active=False)
    StaffMember.objects.create(first_name='Kevin', last_name='Patel', role='technician', department='Laboratory',
                               shift='evening')
    resp = make_client('admin').get(reverse('staff_departments'))
    assert resp.data['data'] == [
        {'department': 'Emergency', 'total': 2, 'active': 1, 'byShift': {'morning': 1, 'evening': 0, 'night': 0}},
        {'department': 'Laboratory', 'total': 1, 'active': 1, 'byShift': {'morning': 0, 'evening': 1, 'night': 0}},
    ]


def test_staff_roster_is_ordered_by_surname(make_client):
    for first, last in (('Maria', 'Garcia'), ('Tom', 'Baker'), ('Aisha', 'Khan')):
        StaffMember.objects.create(first_name=first, last_name=last, role='nurse', department='Emergency')
    resp = make_client('admin').get(reverse('staff_list'))
    assert [s['lastName'] for s in resp.data['data']] == ['Baker', 'Garcia', 'Khan']


def test_dashboard_statistics(make_client, patient, doctor, admission, report):
    Appointment.objects.create(patient=patient, doctor=doctor, date=timezone.localdate(), time=datetime.time(9))
    Appointment.objects.create(patient=patient, doctor=doctor, date=datetime.date(2024, 1, 2),
                               time=datetime.time(9))
    data = make_client('nurse').get(reverse('dashboard_statistics')).data['data']
    assert data['totalPatients'] == 1
    assert data['totalDoctors'] == 1
    assert data['totalAppointments'] == 2
    assert data['todayAppointments'] == 1
    assert data['activeAdmissions'] == 1
    assert data['pendingLabReports'] == 1


def test_dashboard_appointment_feeds(make_client, patient, doctor):
    Appointment.objects.create(patient=patient, doctor=doctor, date=timezone.localdate(), time=datetime.time(9))
    client = make_client('doctor')
    assert len(client.get(reverse('dashboard_today_appointments')).data['data']) == 1
    assert len(client.get(reverse('dashboard_recent_appointments'), {'limit': 3}).data['data']) == 1
    assert client.get(reverse('dashboard_revenue')).status_code == 403
