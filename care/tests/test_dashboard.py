from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from care.models import MedicalRecord, Patient, Payment
from care.services import dashboard as dashboard_service
from care.services.windows import period_starts

pytestmark = pytest.mark.django_db


def _patient(number, name='John Doe'):
    return Patient.objects.create(
        medical_record_number=number, full_name=name, phone_number='555-0100',
        address='12 Elm Street', date_of_birth='1985-04-12',
    )


def _visit(patient, doctor, when, diagnosis='Flu'):
    return MedicalRecord.objects.create(
        patient=patient, doctor=doctor, visit_date=when, diagnosis=diagnosis, prescription='Rest',
    )


def _payment(patient, cashier, receipt, amount):
    amount = Decimal(amount)
    return Payment.objects.create(
        patient=patient, cashier=cashier, doctor_service_fee=amount, medicine_fee=Decimal('0.00'),
        total_amount=amount, receipt_number=receipt,
    )


def test_windows_start_at_local_midnight():
    now = timezone.make_aware(datetime(2024, 5, 16, 15, 30))  # a Thursday
    starts = period_starts(now)
    assert timezone.localtime(starts.today) == timezone.make_aware(datetime(2024, 5, 16))
    assert starts.tomorrow - starts.today == timedelta(days=1)
    assert timezone.localtime(starts.week) == timezone.make_aware(datetime(2024, 5, 13))
    assert timezone.localtime(starts.month) == timezone.make_aware(datetime(2024, 5, 1))


def test_schedule_excludes_visit_a_day_earlier(doctor):
    patient = _patient('MRN001')
    now = timezone.now()
    today = _visit(patient, doctor, now)
    _visit(patient, doctor, now - timedelta(hours=24))
    assert [item['id'] for item in dashboard_service.todays_schedule()] == [today.id]


def test_schedule_is_ascending_and_scoped_to_account(doctor, admin_user):
    from care.models import Doctor, User
    other_user = User.objects.create_user(username='drjones', password='x' * 8, full_name='Ann Jones', role='doctor')
    other = Doctor.objects.create(user=other_user, specialization='ENT', practice_schedule='{}')
    patient = _patient('MRN001')
    start = period_starts().today
    late = _visit(patient, doctor, start + timedelta(hours=15))
    early = _visit(patient, doctor, start + timedelta(hours=9))
    _visit(patient, other, start + timedelta(hours=10))

    schedule = dashboard_service.todays_schedule(doctor.user_id)
    assert [item['id'] for item in schedule] == [early.id, late.id]
    assert schedule[0]['doctor_name'] == 'John Smith'
    assert schedule[0]['patient_name'] == 'John Doe'
    assert len(dashboard_service.todays_schedule()) == 3
    assert dashboard_service.todays_schedule(admin_user.id) == []


def test_recent_activities_merge_newest_first(doctor, receptionist_user):
    base = timezone.now() - timedelta(days=2)
    patients = [_patient(f'MRN00{i}', name=f'Patient {i}') for i in range(4)]
    for i, p in enumerate(patients):
        Patient.objects.filter(id=p.id).update(created_at=base + timedelta(minutes=i))
    visit = _visit(patients[0], doctor, timezone.now())
    payment = _payment(patients[0], receptionist_user, 'R-1', '12.50')
    Payment.objects.filter(id=payment.id).update(payment_date=timezone.now() + timedelta(minutes=5))

    items = dashboard_service.recent_activities()
    assert [item['type'] for item in items] == [
        'payment', 'medical_record', 'patient_registration', 'patient_registration', 'patient_registration',
    ]
    assert items[0]['entity_id'] == payment.id
    assert '12.50' in items[0]['description']
    assert items[1]['entity_id'] == visit.id
    # only the three newest registrations
    assert [item['entity_id'] for item in items[2:]] == [patients[3].id, patients[2].id, patients[1].id]
    timestamps = [item['timestamp'] for item in items]
    assert timestamps == sorted(timestamps, reverse=True)


def test_admin_stats(admin_client, doctor, receptionist_user):
    fresh = _patient('MRN001')
    stale = _patient('MRN002', name='Old Timer')
    Patient.objects.filter(id=stale.id).update(created_at=timezone.now() - timedelta(days=400))
    _visit(fresh, doctor, timezone.now())
    _payment(fresh, receptionist_user, 'R-1', '40.00')
    old_payment = _payment(fresh, receptionist_user, 'R-2', '99.00')
    Payment.objects.filter(id=old_payment.id).update(payment_date=timezone.now() - timedelta(days=400))

    r = admin_client.get('/api/dashboard.getStats')
    data = r.json()['data']
    assert data['patients'] == {'total': 2, 'new_today': 1, 'new_this_week': 1, 'new_this_month': 1}
    assert data['doctors'] == {'total': 1, 'active_today': 1}
    assert data['appointments_today'] == 1
    assert data['revenue'] == {'today': '40.00', 'this_week': '40.00', 'this_month': '40.00'}
    assert len(data['recent_activities']) <= 10


def test_doctor_stats(doctor_client, doctor):
    p1, p2 = _patient('MRN001'), _patient('MRN002', name='Mary Major')
    _visit(p1, doctor, timezone.now())
    _visit(p1, doctor, timezone.now() - timedelta(days=3))
    _visit(p2, doctor, timezone.now() - timedelta(days=5))

    data = doctor_client.get('/api/dashboard.getStats').json()['data']
    assert data['patients_today'] == 1
    assert data['total_patients_treated'] == 2
    assert len(data['recent_medical_records']) == 3


def test_doctor_without_profile_gets_zeroes(doctor_user):
    assert dashboard_service.dashboard_stats(doctor_user.id, 'doctor') == {
        'patients_today': 0,
        'total_patients_treated': 0,
        'recent_medical_records': [],
        'upcoming_schedule': [],
    }


def test_receptionist_stats_are_scoped_to_cashier(receptionist_client, receptionist_user, admin_user):
    patient = _patient('MRN001')
    _payment(patient, receptionist_user, 'R-1', '10.00')
    _payment(patient, receptionist_user, 'R-2', '5.25')
    _payment(patient, admin_user, 'R-3', '100.00')

    data = receptionist_client.get('/api/dashboard.getStats').json()['data']
    assert data['patients_registered_today'] == 1
    assert data['payments_processed_today'] == 2
    assert data['revenue_today'] == '15.25'
    assert {p['receipt_number'] for p in data['recent_payments']} == {'R-1', 'R-2'}


def test_unknown_role_has_empty_dashboard(admin_user):
    assert dashboard_service.dashboard_stats(admin_user.id, 'janitor') == {}


def test_only_admins_view_other_dashboards(admin_client, doctor_client, doctor, receptionist_user):
    r = doctor_client.get('/api/dashboard.getStats', {'user_id': receptionist_user.id})
    assert r.status_code == 403

    r = admin_client.get('/api/dashboard.getStats', {'user_id': doctor.user_id})
    assert r.status_code == 200
    assert 'patients_today' in r.json()['data']


def test_recent_activities_and_schedule_access(admin_client, doctor_client, receptionist_client, doctor):
    assert admin_client.get('/api/dashboard.getRecentActivities').status_code == 200
    assert doctor_client.get('/api/dashboard.getRecentActivities').status_code == 403
    assert doctor_client.get('/api/dashboard.getTodaysSchedule').json()['data'] == []
    assert receptionist_client.get('/api/dashboard.getTodaysSchedule').status_code == 403
