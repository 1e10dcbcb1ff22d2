"""
Integration tests for the record endpoints.

Exercises list search/filter/pagination through HTTP, role gating on
writes and deletes, and the error envelope.  Uses DRF's APIClient within
APITestCase.

To run the tests:

```
pytest -q clinic/tests
```
"""
import datetime

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import Appointment, Doctor, Patient, StaffMember, User


class PatientListTests(APITestCase):
    def setUp(self) -> None:
        self.nurse = User.objects.create_user(username='nurse1', password='N0rse-pass!', role='nurse')
        for i in range(12):
            Patient.objects.create(
                name=f'Patient {i + 1}',
                email=f'patient{i + 1}@example.com',
                gender='Male' if i % 2 else 'Female',
                status='Active' if i < 8 else 'Inactive',
            )
        self.john = Patient.objects.create(name='John Doe', email='j@x.com', gender='Male', status='Active')
        self.client.force_authenticate(user=self.nurse)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        resp = self.client.get(reverse('patient_list'))
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(resp.data['ok'])
        self.assertEqual(resp.data['error']['code'], 'not_authenticated')

    def test_default_page_is_newest_first(self):
        resp = self.client.get(reverse('patient_list'))
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data['ok'])
        self.assertEqual(len(resp.data['data']), 10)
        self.assertEqual(resp.data['data'][0]['id'], self.john.id)
        self.assertEqual(resp.data['pagination'], {'total': 13, 'page': 1, 'pageSize': 10, 'totalPages': 2})

    def test_status_filter_with_page_size(self):
        self.john.delete()
        resp = self.client.get(reverse('patient_list'), {'status': 'Active', 'limit': 5})
        self.assertEqual(resp.data['pagination']['total'], 8)
        self.assertEqual(len(resp.data['data']), 5)
        self.assertEqual(resp.data['pagination']['totalPages'], 2)
        self.assertTrue(all(p['status'] == 'Active' for p in resp.data['data']))

    def test_search_is_case_insensitive(self):
        for term in ('doe', 'DOE', 'j@x'):
            resp = self.client.get(reverse('patient_list'), {'search': term})
            self.assertEqual([p['id'] for p in resp.data['data']], [self.john.id], term)

    def test_filters_combine(self):
        resp = self.client.get(reverse('patient_list'), {'status': 'Inactive', 'gender': 'Male'})
        self.assertEqual(resp.data['pagination']['total'], 2)

    def test_page_past_the_end_is_empty(self):
        resp = self.client.get(reverse('patient_list'), {'page': 5, 'limit': 10})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['data'], [])
        self.assertEqual(resp.data['pagination']['total'], 13)

    def test_non_numeric_page_is_rejected(self):
        resp = self.client.get(reverse('patient_list'), {'page': 'two'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data['error']['code'], 'validation_error')
        self.assertIn('page', resp.data['error']['details'])

    def test_out_of_range_numbers_are_clamped(self):
        resp = self.client.get(reverse('patient_list'), {'page': 0, 'limit': 500})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['pagination']['page'], 1)
        self.assertEqual(resp.data['pagination']['pageSize'], 100)
        self.assertEqual(len(resp.data['data']), 13)


class RecordAccessTests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username='admin1', password='Adm1n-pass!', role='admin')
        self.doctor_user = User.objects.create_user(username='doc1', password='D0ctor-pass!', role='doctor')
        self.nurse = User.objects.create_user(username='nurse1', password='N0rse-pass!', role='nurse')
        self.patient = Patient.objects.create(name='Emily Wilson', email='emily@example.com', gender='Female')
        self.cardio = Doctor.objects.create(name='Dr. James Smith', specialization='Cardiology')
        self.neuro = Doctor.objects.create(name='Dr. Sarah Johnson', specialization='Neurology')

    def test_nurse_registers_patient(self):
        self.client.force_authenticate(user=self.nurse)
        resp = self.client.post(reverse('patient_list'), {
            'name': 'David Lee', 'email': 'david@example.com', 'gender': 'Male', 'bloodGroup': 'AB+',
            'medicalHistory': '<b>Back pain</b>',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['data']['bloodGroup'], 'AB+')
        self.assertEqual(resp.data['data']['medicalHistory'], 'Back pain')
        self.assertTrue(Patient.objects.filter(name='David Lee').exists())

    def test_invalid_patient_gets_validation_envelope(self):
        self.client.force_authenticate(user=self.nurse)
        resp = self.client.post(reverse('patient_list'), {'name': 'A'}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.data['ok'])
        self.assertIn('name', resp.data['error']['details'])

    def test_update_is_partial(self):
        self.client.force_authenticate(user=self.nurse)
        url = reverse('patient_detail', args=[self.patient.id])
        resp = self.client.put(url, {'phone': '555-333-4444'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['data']['phone'], '555-333-4444')
        self.assertEqual(resp.data['data']['name'], 'Emily Wilson')

    def test_only_admin_deletes(self):
        url = reverse('patient_detail', args=[self.patient.id])
        self.client.force_authenticate(user=self.nurse)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)
        self.client.force_authenticate(user=self.doctor_user)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)
        self.client.force_authenticate(user=self.admin)
        resp = self.client.delete(url)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['data']['name'], 'Emily Wilson')
        self.assertFalse(Patient.objects.filter(pk=self.patient.id).exists())

    def test_unknown_record_is_404(self):
        self.client.force_authenticate(user=self.nurse)
        resp = self.client.get(reverse('patient_detail', args=[999]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data['error'], {'code': 'not_found', 'message': 'Patient not found with ID: 999'})

    def test_doctor_writes_are_admin_only(self):
        payload = {'name': 'Dr. Lisa Chen', 'specialization': 'Pediatrics', 'availableDays': ['Monday']}
        self.client.force_authenticate(user=self.doctor_user)
        self.assertEqual(self.client.post(reverse('doctor_list'), payload, format='json').status_code, 403)
        self.client.force_authenticate(user=self.admin)
        resp = self.client.post(reverse('doctor_list'), payload, format='json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data['data']['availableDays'], ['Monday'])

    def test_doctors_by_specialization(self):
        self.client.force_authenticate(user=self.nurse)
        resp = self.client.get(reverse('doctors_by_specialization', args=['Neurology']))
        self.assertEqual([d['id'] for d in resp.data['data']], [self.neuro.id])

    def test_doctor_search_and_filter(self):
        self.client.force_authenticate(user=self.nurse)
        resp = self.client.get(reverse('doctor_list'), {'search': 'cardio'})
        self.assertEqual([d['id'] for d in resp.data['data']], [self.cardio.id])
        resp = self.client.get(reverse('doctor_list'), {'specialization': 'cardiology'})
        self.assertEqual(resp.data['pagination']['total'], 0)

    def test_protected_delete_is_conflict(self):
        from ..models import Admission
        Admission.objects.create(patient=self.patient, doctor=self.cardio, room_number='101',
                                 admission_date=datetime.date(2024, 5, 1), reason_for_admission='Chest pain')
        self.client.force_authenticate(user=self.admin)
        resp = self.client.delete(reverse('doctor_detail', args=[self.cardio.id]))
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.data['error']['code'], 'conflict')

    def test_staff_roster_is_admin_only(self):
        StaffMember.objects.create(first_name='Maria', last_name='Garcia', role='nurse', department='Emergency')
        self.client.force_authenticate(user=self.doctor_user)
        self.assertEqual(self.client.get(reverse('staff_list')).status_code, 403)
        self.client.force_authenticate(user=self.admin)
        resp = self.client.get(reverse('staff_list'), {'isActive': 'true', 'search': 'garcia'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['data'][0]['name'], 'Maria Garcia')


class AppointmentTests(APITestCase):
    def setUp(self) -> None:
        self.nurse = User.objects.create_user(username='nurse1', password='N0rse-pass!', role='nurse')
        self.john = Patient.objects.create(name='John Doe')
        self.emily = Patient.objects.create(name='Emily Wilson')
        self.doc = Doctor.objects.create(name='Dr. Sarah Johnson', specialization='Neurology')
        self.today = timezone.localdate()
        self.a1 = Appointment.objects.create(patient=self.john, doctor=self.doc, date=self.today,
                                             time=datetime.time(10, 30), type='Consultation')
        self.a2 = Appointment.objects.create(patient=self.emily, doctor=self.doc, date=self.today,
                                             time=datetime.time(9, 0), type='Follow-up', status='confirmed')
        self.client.force_authenticate(user=self.nurse)

    def test_create_appointment(self):
        resp = self.client.post(reverse('appointment_list'), {
            'patientId': self.john.id, 'doctorId': self.doc.id,
            'date': '2024-06-20', 'time': '09:15', 'type': 'Check-up',
        }, format='json')
        self.assertEqual(resp.status_code, 201)
        data = resp.data['data']
        self.assertEqual(data['patientName'], 'John Doe')
        self.assertEqual(data['doctorName'], 'Dr. Sarah Johnson')
        self.assertEqual(data['time'], '09:15')
        self.assertEqual(data['status'], 'scheduled')

    def test_unknown_patient_is_rejected(self):
        resp = self.client.post(reverse('appointment_list'), {
            'patientId': 999, 'doctorId': self.doc.id, 'date': '2024-06-20', 'time': '09:15',
        }, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('patientId', resp.data['error']['details'])

    def test_filter_by_patient_id_and_search_by_patient_name(self):
        resp = self.client.get(reverse('appointment_list'), {'patientId': self.emily.id})
        self.assertEqual([a['id'] for a in resp.data['data']], [self.a2.id])
        resp = self.client.get(reverse('appointment_list'), {'search': 'john doe'})
        self.assertEqual([a['id'] for a in resp.data['data']], [self.a1.id])

    def test_patient_appointments_sub_list(self):
        resp = self.client.get(reverse('patient_appointments', args=[self.john.id]))
        self.assertEqual([a['id'] for a in resp.data['data']], [self.a1.id])
        self.assertEqual(self.client.get(reverse('patient_appointments', args=[999])).status_code, 404)

    def test_doctor_appointments_sub_list(self):
        resp = self.client.get(reverse('doctor_appointments', args=[self.doc.id]), {'status': 'confirmed'})
        self.assertEqual([a['id'] for a in resp.data['data']], [self.a2.id])

    def test_status_change(self):
        resp = self.client.patch(reverse('appointment_status', args=[self.a1.id]), {'status': 'completed'},
                                 format='json')
        self.assertEqual(resp.status_code, 200)
        self.a1.refresh_from_db()
        self.assertEqual(self.a1.status, 'completed')
        resp = self.client.patch(reverse('appointment_status', args=[self.a1.id]), {'status': 'lost'},
                                 format='json')
        self.assertEqual(resp.status_code, 400)

    def test_today_is_ordered_by_time(self):
        Appointment.objects.create(patient=self.john, doctor=self.doc,
                                   date=self.today - datetime.timedelta(days=1), time=datetime.time(8, 0))
        resp = self.client.get(reverse('appointments_today'))
        self.assertEqual([a['id'] for a in resp.data['data']], [self.a2.id, self.a1.id])

    def test_recent_honours_limit(self):
        resp = self.client.get(reverse('appointments_recent'), {'limit': 1})
        self.assertEqual(len(resp.data['data']), 1)
        self.assertEqual(self.client.get(reverse('appointments_recent'), {'limit': 0}).status_code, 400)
