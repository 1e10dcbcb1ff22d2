"""
The list-capable collections exposed by the API.

Each :class:`Collection` pairs a record store with the :class:`ListSpec`
describing what its list endpoint can search and filter on.  Views never
evaluate queries themselves; they ask the collection.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from django.conf import settings

from clinic.listquery import ListQuery, ListResult, ListSpec
from clinic.models import Admission, Appointment, Bill, Doctor, LabReport, Medicine, Patient, StaffMember
from clinic.repository import ModelRepository
from clinic.serializers.admission import AdmissionSerializer
from clinic.serializers.appointment import AppointmentSerializer
from clinic.serializers.billing import BillSerializer
from clinic.serializers.doctor import DoctorSerializer
from clinic.serializers.lab import LabReportSerializer
from clinic.serializers.patient import PatientSerializer
from clinic.serializers.pharmacy import MedicineSerializer
from clinic.serializers.staff import StaffMemberSerializer


class Collection:
    def __init__(self, name: str, spec: ListSpec, repository):
        self.name = name
        self.spec = spec
        self.repository = repository

    def query(self, params: Mapping[str, Any], **fixed: Any) -> ListQuery:
        """Parse request params; ``fixed`` filters (from the URL) override the query string."""
        query = self.spec.parse(
            params,
            default_page_size=settings.LIST_DEFAULT_PAGE_SIZE,
            max_page_size=settings.LIST_MAX_PAGE_SIZE,
        )
        if fixed:
            query = replace(query, filters={**query.filters, **fixed})
        return query

    def list(self, params: Mapping[str, Any], **fixed: Any) -> ListResult:
        return self.spec.evaluate(self.repository.all(), self.query(params, **fixed))

    def __repr__(self) -> str:
        return f"<Collection {self.name}>"


patients = Collection(
    'patients',
    ListSpec.of(searchable=('name', 'email', 'phone'), filters=('gender', 'status', 'bloodGroup')),
    ModelRepository(Patient, PatientSerializer),
)

doctors = Collection(
    'doctors',
    ListSpec.of(searchable=('name', 'specialization', 'email'), filters=('specialization',)),
    ModelRepository(Doctor, DoctorSerializer),
)

appointments = Collection(
    'appointments',
    ListSpec.of(
        searchable=('patientName', 'doctorName', 'type'),
        filters=('status', 'doctorId', 'patientId', 'date', 'type'),
    ),
    ModelRepository(Appointment, AppointmentSerializer, select_related=('patient', 'doctor')),
)

admissions = Collection(
    'admissions',
    ListSpec.of(
        searchable=('patientName', 'doctorName', 'roomNumber', 'reasonForAdmission'),
        filters=('status', 'patientId', 'doctorId', 'wardType'),
    ),
    ModelRepository(Admission, AdmissionSerializer, select_related=('patient', 'doctor')),
)

medicines = Collection(
    'medicines',
    ListSpec.of(
        searchable=('name', 'description', 'manufacturer', 'category'),
        filters=('category',),
        requiresPrescription='prescriptionRequired',
    ),
    ModelRepository(Medicine, MedicineSerializer),
)

lab_reports = Collection(
    'lab-reports',
    ListSpec.of(
        searchable=('testName', 'patientName', 'doctorName'),
        filters=('status', 'testType', 'patientId', 'doctorId'),
    ),
    ModelRepository(LabReport, LabReportSerializer, select_related=('patient', 'doctor')),
)

staff = Collection(
    'staff',
    ListSpec.of(searchable=('name', 'email', 'position'), filters=('department', 'role', 'isActive', 'shift')),
    ModelRepository(StaffMember, StaffMemberSerializer, ordering=('last_name', 'first_name', 'id')),
)

bills = Collection(
    'bills',
    ListSpec.of(
        searchable=('invoiceNumber', 'patientName', 'description'),
        filters=('status', 'paymentMethod', 'insuranceStatus', 'department', 'patientId'),
    ),
    ModelRepository(Bill, BillSerializer, select_related=('patient',)),
)
