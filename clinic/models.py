"""
Database models for the hospital management backend.

These models capture the records the front-end screens list and edit:
patients, doctors, appointments, admissions, pharmacy stock, lab reports,
the staff roster and billing.  Field names are snake_case here; the
serializers expose them in the camelCase the front end expects.
"""
from __future__ import annotations

import os
import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """Login account with a role.

    Roles mirror the front-end roles: 'admin', 'doctor' and 'nurse'.
    """
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('doctor', 'Doctor'),
        ('nurse', 'Nurse'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='nurse')

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Patient(TimestampedModel):
    GENDER_CHOICES = [('Male', 'Male'), ('Female', 'Female'), ('Other', 'Other')]
    STATUS_CHOICES = [('Active', 'Active'), ('Inactive', 'Inactive')]

    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    blood_group = models.CharField(max_length=5, blank=True)
    address = models.CharField(max_length=255, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    medical_history = models.TextField(blank=True)
    # list screens filter on status; indexed
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Active', db_index=True)

    def __str__(self) -> str:
        return self.name


class Doctor(TimestampedModel):
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    specialization = models.CharField(max_length=100, db_index=True)
    experience = models.PositiveIntegerField(default=0, help_text="Years of practice")
    qualifications = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    address = models.CharField(max_length=255, blank=True)
    available_hours = models.CharField(max_length=64, blank=True)
    available_days = models.JSONField(default=list, blank=True)
    photo = models.URLField(blank=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.specialization})"


class Appointment(TimestampedModel):
    STATUS_CHOICES = [
        ('scheduled', 'Scheduled'),
        ('confirmed', 'Confirmed'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
        ('no-show', 'No show'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='appointments')
    date = models.DateField(db_index=True)
    time = models.TimeField()
    duration = models.PositiveIntegerField(default=30, help_text="Minutes")
    type = models.CharField(max_length=50, default='Consultation')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='scheduled', db_index=True)
    symptoms = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"{self.patient_id} with {self.doctor_id} on {self.date} {self.time}"


class Admission(TimestampedModel):
    STATUS_ACTIVE = 'Active'
    STATUS_DISCHARGED = 'Discharged'
    STATUS_CHOICES = [(STATUS_ACTIVE, 'Active'), (STATUS_DISCHARGED, 'Discharged')]
    WARD_CHOICES = [
        ('General', 'General'),
        ('Semi-Private', 'Semi-Private'),
        ('Private', 'Private'),
        ('ICU', 'ICU'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='admissions')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='admissions')
    room_number = models.CharField(max_length=20)
    ward_type = models.CharField(max_length=20, choices=WARD_CHOICES, default='General')
    admission_date = models.DateField()
    discharge_date = models.DateField(null=True, blank=True)
    reason_for_admission = models.CharField(max_length=255)
    diagnosis = models.TextField(blank=True)
    treatment_plan = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    notes = models.TextField(blank=True)
    discharge_notes = models.TextField(blank=True)
    discharge_summary = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Admission {self.pk} room {self.room_number} ({self.status})"


class Medicine(TimestampedModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, db_index=True)
    manufacturer = models.CharField(max_length=255, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)
    dosage = models.CharField(max_length=255, blank=True)
    expiry_date = models.DateField(null=True, blank=True)
    side_effects = models.TextField(blank=True)
    prescription_required = models.BooleanField(default=False)

    def __str__(self) -> str:
        return self.name


def _attachment_upload(instance, filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    return f"lab-reports/{timezone.localdate():%Y/%m}/{uuid.uuid4().hex}{ext}"


class LabReport(TimestampedModel):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in-progress', 'In progress'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='lab_reports')
    doctor = models.ForeignKey(Doctor, null=True, blank=True, on_delete=models.SET_NULL, related_name='lab_reports')
    test_name = models.CharField(max_length=255)
    test_type = models.CharField(max_length=100, db_index=True)
    test_date = models.DateField()
    results = models.TextField(blank=True)
    normal_range = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    notes = models.TextField(blank=True)
    attachment = models.FileField(upload_to=_attachment_upload, max_length=512, blank=True)
    attachment_content_type = models.CharField(max_length=128, blank=True)

    def __str__(self) -> str:
        return f"{self.test_name} for {self.patient_id}"


class StaffMember(TimestampedModel):
    ROLE_CHOICES = [
        ('doctor', 'Doctor'),
        ('nurse', 'Nurse'),
        ('technician', 'Technician'),
        ('pharmacist', 'Pharmacist'),
        ('receptionist', 'Receptionist'),
        ('administrator', 'Administrator'),
    ]
    SHIFT_CHOICES = [('morning', 'Morning'), ('evening', 'Evening'), ('night', 'Night')]

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    position = models.CharField(max_length=100, blank=True)
    department = models.CharField(max_length=100, db_index=True)
    shift = models.CharField(max_length=10, choices=SHIFT_CHOICES, default='morning')
    is_active = models.BooleanField(default=True)
    hire_date = models.DateField(null=True, blank=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} ({self.department})"


class Bill(TimestampedModel):
    STATUS_CHOICES = [
        ('paid', 'Paid'),
        ('pending', 'Pending'),
        ('partial', 'Partially paid'),
        ('cancelled', 'Cancelled'),
    ]
    PAYMENT_CHOICES = [
        ('cash', 'Cash'),
        ('card', 'Card'),
        ('insurance', 'Insurance'),
        ('online', 'Online'),
    ]
    INSURANCE_CHOICES = [
        ('none', 'None'),
        ('submitted', 'Submitted'),
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]
    invoice_number = models.CharField(max_length=32, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='bills')
    department = models.CharField(max_length=100, blank=True)
    description = models.CharField(max_length=255, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_CHOICES, blank=True)
    insurance_provider = models.CharField(max_length=100, blank=True)
    insurance_status = models.CharField(max_length=20, choices=INSURANCE_CHOICES, default='none')
    issue_date = models.DateField()
    due_date = models.DateField()
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['status', 'due_date'], name='clinic_bill_status_due_idx'),
        ]

    @property
    def outstanding_amount(self):
        return max(self.amount - self.paid_amount, 0)

    def __str__(self) -> str:
        return f"{self.invoice_number} ({self.status})"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]
