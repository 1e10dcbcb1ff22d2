"""
Django admin registrations for the clinic models.

Useful during development to inspect records created through the API.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    User,
    Patient,
    Doctor,
    Appointment,
    Admission,
    Medicine,
    LabReport,
    StaffMember,
    Bill,
    AuditEvent,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role', 'is_staff')
    fieldsets = BaseUserAdmin.fieldsets + (('Role', {'fields': ('role',)}),)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'gender', 'blood_group', 'status', 'created_at')
    list_filter = ('status', 'gender')
    search_fields = ('name', 'email', 'phone')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'specialization', 'experience')
    list_filter = ('specialization',)
    search_fields = ('name', 'email')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'date', 'time', 'status')
    list_filter = ('status', 'date')


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'room_number', 'ward_type', 'status')
    list_filter = ('status', 'ward_type')


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'category', 'stock', 'price', 'expiry_date')
    list_filter = ('category', 'prescription_required')
    search_fields = ('name', 'manufacturer')


@admin.register(LabReport)
class LabReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'test_name', 'test_type', 'patient', 'status', 'test_date')
    list_filter = ('status', 'test_type')


@admin.register(StaffMember)
class StaffMemberAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'role', 'department', 'shift', 'is_active')
    list_filter = ('department', 'role', 'is_active')


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('invoice_number', 'patient', 'amount', 'paid_amount', 'status', 'due_date')
    list_filter = ('status', 'payment_method', 'insurance_status')
    search_fields = ('invoice_number',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'action', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
