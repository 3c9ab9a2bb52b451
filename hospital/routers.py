"""
URL mappings for the SIMRS API.

Paths follow the front-end client and deliberately omit trailing
slashes.
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .auth_views import login_view, logout_view, me_view
from .views import billing, dashboard, health, inpatient, laboratory, patients, pharmacy, records, scheduling, users

urlpatterns = [
    path('healthz', health.healthz),

    # auth & staff accounts
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/me', me_view, name='me_view'),
    path('api/users', users.users),

    # dashboard
    path('api/dashboard/stats', dashboard.dashboard_stats),
    path('api/dashboard/recent-activities', dashboard.recent_activities),
    path('api/dashboard/upcoming-appointments', dashboard.upcoming_appointments),
    path('api/dashboard/hospital-capacity', dashboard.hospital_capacity),

    # registration
    path('api/patients', patients.patients),
    path('api/patients/<int:patient_id>', patients.patient_detail),
    path('api/patients/<int:patient_id>/insurances', patients.patient_insurances),
    path('api/insurance-providers', patients.insurance_providers),
    path('api/departments', scheduling.departments),
    path('api/departments/<int:department_id>', scheduling.department_detail),
    path('api/doctors', scheduling.doctors),
    path('api/doctors/<int:doctor_id>', scheduling.doctor_detail),
    path('api/doctors/<int:doctor_id>/schedules', scheduling.doctor_schedules),
    path('api/appointments', scheduling.appointments),
    path('api/appointments/<int:appointment_id>', scheduling.appointment_detail),

    # clinical
    path('api/medical-records', records.medical_records),
    path('api/medical-records/<int:record_id>', records.medical_record_detail),
    path('api/lab-tests', laboratory.lab_tests),
    path('api/lab-requests', laboratory.lab_requests),
    path('api/lab-requests/<int:request_id>', laboratory.lab_request_detail),
    path('api/lab-results', laboratory.lab_results),
    path('api/lab-results/<int:result_id>', laboratory.lab_result_detail),

    # pharmacy
    path('api/medications', pharmacy.medications),
    path('api/medications/<int:medication_id>', pharmacy.medication_detail),
    path('api/prescriptions', pharmacy.prescriptions),
    path('api/prescriptions/<int:prescription_id>', pharmacy.prescription_detail),

    # inpatient
    path('api/rooms', inpatient.rooms),
    path('api/rooms/<int:room_id>/beds', inpatient.room_beds),
    path('api/beds/available', inpatient.available_beds),
    path('api/inpatient/admissions', inpatient.admissions),
    path('api/inpatient/admissions/<int:admission_id>', inpatient.admission_detail),

    # billing
    path('api/billings', billing.billings),
    path('api/billings/<int:billing_id>', billing.billing_detail),
]
