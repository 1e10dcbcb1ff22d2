"""
Management command to populate the database with demo records.

Dates are relative to today so the dashboard, "today" and overdue
reports have something to show.  Re-running is safe: records are matched
on a natural key and left alone if they already exist.
"""
from datetime import time, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from clinic.models import (
    Admission, Appointment, Bill, Doctor, LabReport, Medicine, Patient, StaffMember,
)


DOCTORS = [
    ('Dr. James Smith', 'james.smith@example.com', 'Cardiology', 12, 'MD, MBBS, Cardiology',
     ['Monday', 'Tuesday', 'Wednesday', 'Friday']),
    ('Dr. Sarah Johnson', 'sarah.johnson@example.com', 'Neurology', 8, 'MD, Neurology, MBBS',
     ['Monday', 'Thursday', 'Friday']),
    ('Dr. Robert Williams', 'robert.williams@example.com', 'Orthopedics', 15, 'MBBS, MS Orthopedics',
     ['Tuesday', 'Wednesday', 'Thursday', 'Saturday']),
    ('Dr. Lisa Chen', 'lisa.chen@example.com', 'Pediatrics', 10, 'MD, DCH, MBBS',
     ['Monday', 'Tuesday', 'Thursday', 'Friday']),
]

PATIENTS = [
    ('John Doe', 'john.doe@example.com', '555-111-2222', 'Male', 'O+', '1985-07-15',
     'Hypertension, diagnosed in 2018. Taking regular medication.'),
    ('Michael Brown', 'michael.brown@example.com', '555-222-3333', 'Male', 'A+', '1978-03-22',
     'Type 2 diabetes, managed with diet and exercise.'),
    ('Emily Wilson', 'emily.wilson@example.com', '555-333-4444', 'Female', 'B-', '1990-11-05',
     'Asthma since childhood. Carries emergency inhaler.'),
    ('David Lee', 'david.lee@example.com', '555-444-5555', 'Male', 'AB+', '1965-09-28',
     'History of lower back pain. Had surgery in 2019.'),
    ('Sophia Martinez', 'sophia.martinez@example.com', '555-555-6666', 'Female', 'O-', '1992-05-17',
     'Allergic to penicillin.'),
    ('Jennifer Adams', 'jennifer.adams@example.com', '555-666-7777', 'Female', 'A-', '1980-12-03',
     'Hypothyroidism, diagnosed in 2017. Taking daily medication.'),
]

MEDICINES = [
    ('Amoxicillin', 'Antibiotics', 'MedPharma Inc.', '12.99', 120, '500mg, 3 times daily', 400, True),
    ('Ibuprofen', 'Analgesics', 'HealthPharm', '8.50', 200, '200mg, every 6 hours as needed', 600, False),
    ('Lisinopril', 'Antihypertensives', 'CardioMed Labs', '15.75', 85, '10mg, once daily', 20, True),
    ('Cetirizine', 'Antihistamines', 'AllergyStop', '9.99', 150, '10mg, once daily', 500, False),
    ('Metformin', 'Antidiabetics', 'DiabeCare', '14.25', 15, '500mg, twice daily with meals', 300, True),
    ('Atorvastatin', 'Cardiovascular', 'HeartWell Pharma', '18.50', 75, '20mg, once daily', 12, True),
    ('Vitamin D3', 'Nutritional Supplements', 'VitaHealth', '11.99', 180, '1000 IU, once daily', 700, False),
    ('Albuterol Inhaler', 'Respiratory', 'RespiCare', '24.99', 8, '2 inhalations every 4-6 hours', 90, True),
]

STAFF = [
    ('Maria', 'Garcia', 'maria.garcia@hospital.com', 'nurse', 'Head Nurse', 'Emergency', 'morning'),
    ('Kevin', 'Patel', 'kevin.patel@hospital.com', 'technician', 'Lab Technician', 'Laboratory', 'evening'),
    ('Aisha', 'Khan', 'aisha.khan@hospital.com', 'pharmacist', 'Senior Pharmacist', 'Pharmacy', 'morning'),
    ('Tom', 'Baker', 'tom.baker@hospital.com', 'receptionist', 'Front Desk', 'Administration', 'morning'),
    ('Grace', 'Okafor', 'grace.okafor@hospital.com', 'nurse', 'Ward Nurse', 'Cardiology', 'night'),
]


class Command(BaseCommand):
    help = 'Populate database with demo data'

    @transaction.atomic
    def handle(self, *args, **options):
        self.today = timezone.localdate()
        doctors = self.create_doctors()
        patients = self.create_patients()
        self.create_appointments(patients, doctors)
        self.create_admissions(patients, doctors)
        self.create_medicines()
        self.create_lab_reports(patients, doctors)
        self.create_staff()
        self.create_bills(patients)
        self.stdout.write(self.style.SUCCESS('Demo data ready.'))

    def create_doctors(self):
        doctors = []
        for name, email, spec, years, quals, days in DOCTORS:
            doctor, _ = Doctor.objects.get_or_create(email=email, defaults={
                'name': name, 'specialization': spec, 'experience': years,
                'qualifications': quals, 'available_hours': '9:00 AM - 5:00 PM', 'available_days': days,
            })
            doctors.append(doctor)
        self.stdout.write(f'doctors: {len(doctors)}')
        return doctors

    def create_patients(self):
        patients = []
        for name, email, phone, gender, blood, dob, history in PATIENTS:
            patient, _ = Patient.objects.get_or_create(email=email, defaults={
                'name': name, 'phone': phone, 'gender': gender, 'blood_group': blood,
                'date_of_birth': dob, 'medical_history': history,
            })
            patients.append(patient)
        self.stdout.write(f'patients: {len(patients)}')
        return patients

    def create_appointments(self, patients, doctors):
        plan = [
            (0, 1, -7, time(10, 30), 'Consultation', 'completed'),
            (2, 3, -6, time(14, 0), 'Follow-up', 'completed'),
            (1, 0, 0, time(9, 15), 'Check-up', 'scheduled'),
            (3, 2, 0, time(11, 0), 'Consultation', 'confirmed'),
            (4, 1, 1, time(15, 30), 'Follow-up', 'scheduled'),
            (5, 3, 7, time(10, 0), 'Check-up', 'scheduled'),
        ]
        for p, d, offset, at, kind, status in plan:
            Appointment.objects.get_or_create(
                patient=patients[p], doctor=doctors[d], date=self.today + timedelta(days=offset), time=at,
                defaults={'type': kind, 'status': status},
            )

    def create_admissions(self, patients, doctors):
        Admission.objects.get_or_create(
            patient=patients[3], room_number='204', defaults={
                'doctor': doctors[2], 'ward_type': 'Private',
                'admission_date': self.today - timedelta(days=3),
                'reason_for_admission': 'Post-operative observation',
            })
        Admission.objects.get_or_create(
            patient=patients[0], room_number='ICU-2', defaults={
                'doctor': doctors[0], 'ward_type': 'ICU',
                'admission_date': self.today - timedelta(days=20),
                'discharge_date': self.today - timedelta(days=12),
                'reason_for_admission': 'Hypertensive crisis',
                'status': Admission.STATUS_DISCHARGED,
            })

    def create_medicines(self):
        for name, category, maker, price, stock, dosage, shelf_days, rx in MEDICINES:
            Medicine.objects.get_or_create(name=name, defaults={
                'category': category, 'manufacturer': maker, 'price': Decimal(price), 'stock': stock,
                'dosage': dosage, 'expiry_date': self.today + timedelta(days=shelf_days),
                'prescription_required': rx,
            })

    def create_lab_reports(self, patients, doctors):
        plan = [
            (0, 1, 'Complete Blood Count', 'Blood Test', -5, 'completed'),
            (2, 0, 'Chest X-Ray', 'X-Ray', -2, 'completed'),
            (1, 3, 'Lipid Panel', 'Lipid Profile', -1, 'in-progress'),
            (4, 2, 'Urinalysis', 'Urine Test', 0, 'pending'),
            (3, 1, 'Lumbar Spine MRI', 'MRI', 0, 'pending'),
        ]
        for p, d, test, kind, offset, status in plan:
            LabReport.objects.get_or_create(
                patient=patients[p], test_name=test, defaults={
                    'doctor': doctors[d], 'test_type': kind, 'status': status,
                    'test_date': self.today + timedelta(days=offset),
                })

    def create_staff(self):
        for first, last, email, role, position, dept, shift in STAFF:
            StaffMember.objects.get_or_create(email=email, defaults={
                'first_name': first, 'last_name': last, 'role': role, 'position': position,
                'department': dept, 'shift': shift, 'hire_date': self.today - timedelta(days=365),
            })

    def create_bills(self, patients):
        plan = [
            ('INV-DEMO-0001', 0, 'Cardiology', '1250.00', '1250.00', 'paid', 'card', -40, 'none'),
            ('INV-DEMO-0002', 2, 'Pediatrics', '850.00', '0.00', 'pending', 'insurance', -75, 'submitted'),
            ('INV-DEMO-0003', 1, 'Cardiology', '1500.00', '500.00', 'partial', 'cash', -130, 'none'),
            ('INV-DEMO-0004', 3, 'Orthopedics', '2000.00', '0.00', 'pending', 'insurance', -10, 'approved'),
            ('INV-DEMO-0005', 4, 'Neurology', '750.00', '0.00', 'pending', 'online', 0, 'none'),
        ]
        for number, p, dept, amount, paid, status, method, offset, insurance in plan:
            issued = self.today + timedelta(days=offset)
            Bill.objects.get_or_create(invoice_number=number, defaults={
                'patient': patients[p], 'department': dept, 'description': f'{dept} services',
                'amount': Decimal(amount), 'paid_amount': Decimal(paid), 'status': status,
                'payment_method': method, 'insurance_status': insurance,
                'insurance_provider': 'BlueShield' if insurance != 'none' else '',
                'issue_date': issued, 'due_date': issued + timedelta(days=30),
                'paid_at': timezone.now() if status == 'paid' else None,
            })
