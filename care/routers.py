"""
URL mappings for the clinic RPC API.

Every procedure is served at ``api/<namespace>.<procedure>``; queries
answer ``GET`` and mutations answer ``POST``.  Trailing slashes are
deliberately omitted.
"""
from django.urls import include, path

from .auth_views import login_view, validate_token_view
from .views import dashboard, doctors, health, medical_records, patients, payments, users

urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('api/healthcheck', health.healthcheck, name='healthcheck'),

    # Authentication
    path('api/auth.login', login_view, name='auth.login'),
    path('api/auth.validateToken', validate_token_view, name='auth.validateToken'),

    # Accounts
    path('api/users.create', users.create_user, name='users.create'),
    path('api/users.getAll', users.list_users, name='users.getAll'),
    path('api/users.getById', users.get_user, name='users.getById'),
    path('api/users.update', users.update_user, name='users.update'),
    path('api/users.delete', users.delete_user, name='users.delete'),

    # Patients
    path('api/patients.create', patients.create_patient, name='patients.create'),
    path('api/patients.getAll', patients.list_patients, name='patients.getAll'),
    path('api/patients.getById', patients.get_patient, name='patients.getById'),
    path('api/patients.update', patients.update_patient, name='patients.update'),
    path('api/patients.delete', patients.delete_patient, name='patients.delete'),
    path('api/patients.search', patients.search_patients, name='patients.search'),

    # Doctors
    path('api/doctors.create', doctors.create_doctor, name='doctors.create'),
    path('api/doctors.getAll', doctors.list_doctors, name='doctors.getAll'),
    path('api/doctors.getById', doctors.get_doctor, name='doctors.getById'),
    path('api/doctors.update', doctors.update_doctor, name='doctors.update'),
    path('api/doctors.delete', doctors.delete_doctor, name='doctors.delete'),
    path('api/doctors.getPatients', doctors.doctor_patients, name='doctors.getPatients'),

    # Medical records
    path('api/medicalRecords.create', medical_records.create_medical_record, name='medicalRecords.create'),
    path('api/medicalRecords.getAll', medical_records.list_medical_records, name='medicalRecords.getAll'),
    path('api/medicalRecords.getById', medical_records.get_medical_record, name='medicalRecords.getById'),
    path('api/medicalRecords.update', medical_records.update_medical_record, name='medicalRecords.update'),
    path('api/medicalRecords.delete', medical_records.delete_medical_record, name='medicalRecords.delete'),
    path('api/medicalRecords.getPatientHistory', medical_records.patient_history,
         name='medicalRecords.getPatientHistory'),
    path('api/medicalRecords.getTodaysRecords', medical_records.todays_records,
         name='medicalRecords.getTodaysRecords'),

    # Payments
    path('api/payments.create', payments.create_payment, name='payments.create'),
    path('api/payments.getAll', payments.list_payments, name='payments.getAll'),
    path('api/payments.getById', payments.get_payment, name='payments.getById'),
    path('api/payments.getHistory', payments.payment_history, name='payments.getHistory'),
    path('api/payments.getReceipt', payments.payment_receipt, name='payments.getReceipt'),
    path('api/payments.getStatistics', payments.payment_statistics, name='payments.getStatistics'),

    # Dashboard
    path('api/dashboard.getStats', dashboard.dashboard_stats, name='dashboard.getStats'),
    path('api/dashboard.getRecentActivities', dashboard.recent_activities, name='dashboard.getRecentActivities'),
    path('api/dashboard.getTodaysSchedule', dashboard.todays_schedule, name='dashboard.getTodaysSchedule'),
]
