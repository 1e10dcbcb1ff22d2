"""
URL mappings for the clinic API.

Paths match the ones the front-end services call.  Trailing slashes are
omitted (``APPEND_SLASH = False``).  Literal segments such as
``/appointments/today`` are listed before the ``<int:pk>`` routes they
sit next to.
"""
from django.urls import path, include

from .views import admissions, appointments, auth, dashboard, doctors, financial, health, lab, patients, pharmacy, staff

urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),

    # Authentication
    path('api/auth/login', auth.login_view, name='login_view'),
    path('api/auth/register', auth.register_view, name='register_view'),
    path('api/auth/profile', auth.profile_view, name='profile_view'),
    path('api/auth/refresh', auth.jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', auth.jwt_logout_view, name='jwt_logout_view'),

    # Patients
    path('api/patients', patients.patient_list, name='patient_list'),
    path('api/patients/<int:pk>', patients.patient_detail, name='patient_detail'),
    path('api/patients/<int:pk>/appointments', patients.patient_appointments, name='patient_appointments'),
    path('api/patients/<int:pk>/admissions', patients.patient_admissions, name='patient_admissions'),
    path('api/patients/<int:pk>/lab-reports', patients.patient_lab_reports, name='patient_lab_reports'),

    # Doctors
    path('api/doctors', doctors.doctor_list, name='doctor_list'),
    path('api/doctors/specialization/<str:name>', doctors.doctors_by_specialization,
         name='doctors_by_specialization'),
    path('api/doctors/<int:pk>', doctors.doctor_detail, name='doctor_detail'),
    path('api/doctors/<int:pk>/appointments', doctors.doctor_appointments, name='doctor_appointments'),
    path('api/doctors/<int:pk>/lab-reports', doctors.doctor_lab_reports, name='doctor_lab_reports'),

    # Appointments
    path('api/appointments', appointments.appointment_list, name='appointment_list'),
    path('api/appointments/today', appointments.appointments_today, name='appointments_today'),
    path('api/appointments/recent', appointments.appointments_recent, name='appointments_recent'),
    path('api/appointments/<int:pk>', appointments.appointment_detail, name='appointment_detail'),
    path('api/appointments/<int:pk>/status', appointments.appointment_status, name='appointment_status'),

    # Admissions
    path('api/admissions', admissions.admission_list, name='admission_list'),
    path('api/admissions/<int:pk>', admissions.admission_detail, name='admission_detail'),
    path('api/admissions/<int:pk>/discharge', admissions.admission_discharge, name='admission_discharge'),

    # Pharmacy
    path('api/medicines', pharmacy.medicine_list, name='medicine_list'),
    path('api/medicines/low-stock', pharmacy.medicines_low_stock, name='medicines_low_stock'),
    path('api/medicines/expiring', pharmacy.medicines_expiring, name='medicines_expiring'),
    path('api/medicines/stats', pharmacy.medicines_stats, name='medicines_stats'),
    path('api/medicines/category/<str:name>', pharmacy.medicines_by_category, name='medicines_by_category'),
    path('api/medicines/<int:pk>', pharmacy.medicine_detail, name='medicine_detail'),
    path('api/medicines/<int:pk>/stock', pharmacy.medicine_stock, name='medicine_stock'),

    # Lab reports
    path('api/lab-reports', lab.lab_report_list, name='lab_report_list'),
    path('api/lab-reports/stats', lab.lab_report_stats, name='lab_report_stats'),
    path('api/lab-reports/recent', lab.lab_report_recent, name='lab_report_recent'),
    path('api/lab-reports/<int:pk>', lab.lab_report_detail, name='lab_report_detail'),
    path('api/lab-reports/<int:pk>/status', lab.lab_report_status, name='lab_report_status'),
    path('api/lab-reports/<int:pk>/attachment', lab.lab_report_attachment, name='lab_report_attachment'),

    # Staff
    path('api/staff', staff.staff_list, name='staff_list'),
    path('api/staff/departments', staff.staff_departments, name='staff_departments'),
    path('api/staff/<int:pk>', staff.staff_detail, name='staff_detail'),

    # Billing & financial reports
    path('api/bills', financial.bill_list, name='bill_list'),
    path('api/bills/<int:pk>', financial.bill_detail, name='bill_detail'),
    path('api/financial/overview', financial.financial_overview, name='financial_overview'),
    path('api/financial/revenue', financial.financial_revenue, name='financial_revenue'),
    path('api/financial/overdue', financial.financial_overdue, name='financial_overdue'),
    path('api/financial/insurance', financial.financial_insurance, name='financial_insurance'),

    # Dashboard
    path('api/dashboard/statistics', dashboard.dashboard_statistics, name='dashboard_statistics'),
    path('api/dashboard/recent-appointments', dashboard.dashboard_recent_appointments,
         name='dashboard_recent_appointments'),
    path('api/dashboard/today-appointments', dashboard.dashboard_today_appointments,
         name='dashboard_today_appointments'),
    path('api/dashboard/revenue', dashboard.dashboard_revenue, name='dashboard_revenue'),
]
