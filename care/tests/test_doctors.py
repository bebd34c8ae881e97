from datetime import timedelta

import pytest
from django.utils import timezone

from care.models import AuditEvent, Doctor, MedicalRecord, Patient, User
from care.services import doctors as doctor_service

pytestmark = pytest.mark.django_db


@pytest.fixture
def patient():
    return Patient.objects.create(
        medical_record_number='MRN001', full_name='John Doe', phone_number='555-0100',
        address='12 Elm Street', date_of_birth='1985-04-12',
    )


def _payload(user_id, **overrides):
    payload = {'user_id': user_id, 'specialization': 'Cardiology', 'practice_schedule': '{"tue": "08-12"}'}
    payload.update(overrides)
    return payload


def test_create_profile_for_doctor_account(admin_client, doctor_user):
    r = admin_client.post('/api/doctors.create', _payload(doctor_user.id), format='json')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['user_id'] == doctor_user.id
    assert data['full_name'] == 'John Smith'
    assert data['practice_schedule'] == '{"tue": "08-12"}'


def test_profile_requires_doctor_role(admin_client, receptionist_user):
    r = admin_client.post('/api/doctors.create', _payload(receptionist_user.id), format='json')
    assert r.status_code == 400
    assert 'user_id' in r.json()['error']['message']
    assert not Doctor.objects.exists()


def test_profile_requires_existing_account(admin_client):
    r = admin_client.post('/api/doctors.create', _payload(99999), format='json')
    assert r.status_code == 404
    assert r.json()['error']['message'] == 'User with ID 99999 not found'


def test_one_profile_per_account(admin_client, doctor):
    r = admin_client.post('/api/doctors.create', _payload(doctor.user_id), format='json')
    assert r.status_code == 409


def test_list_includes_account_name(receptionist_client, doctor):
    r = receptionist_client.get('/api/doctors.getAll')
    assert [(d['id'], d['full_name']) for d in r.json()['data']] == [(doctor.id, 'John Smith')]


def test_owning_doctor_may_update_profile(doctor_client, doctor):
    r = doctor_client.post('/api/doctors.update', {'id': doctor.id, 'specialization': 'Pediatrics'}, format='json')
    assert r.status_code == 200
    doctor.refresh_from_db()
    assert doctor.specialization == 'Pediatrics'
    assert doctor.practice_schedule == '{"monday": "09:00-17:00"}'

    event = AuditEvent.objects.get(action='doctor.update', object_id=doctor.id)
    assert event.user == doctor.user
    assert event.detail == {'fields': ['specialization']}


def test_other_doctor_may_not_update_profile(doctor):
    from rest_framework.test import APIClient
    other = User.objects.create_user(username='drjones', password='testpass123', full_name='Ann Jones', role='doctor')
    client = APIClient()
    client.force_authenticate(user=other)
    r = client.post('/api/doctors.update', {'id': doctor.id, 'specialization': 'Surgery'}, format='json')
    assert r.status_code == 403


def test_update_missing_profile(admin_client):
    r = admin_client.post('/api/doctors.update', {'id': 99999, 'specialization': 'X'}, format='json')
    assert r.status_code == 404


def test_delete_blocked_by_records(admin_client, doctor, patient):
    MedicalRecord.objects.create(
        patient=patient, doctor=doctor, visit_date=timezone.now(), diagnosis='Flu', prescription='Rest',
    )
    r = admin_client.post('/api/doctors.delete', {'id': doctor.id}, format='json')
    assert r.status_code == 409
    assert 'medical records' in r.json()['error']['message']


def test_delete_profile(admin_client, doctor):
    r = admin_client.post('/api/doctors.delete', {'id': doctor.id}, format='json')
    assert r.json()['data'] == {'success': True}
    assert not Doctor.objects.exists()


def test_patients_seen_today(admin_client, doctor, patient):
    now = timezone.now()
    today = MedicalRecord.objects.create(
        patient=patient, doctor=doctor, visit_date=now, diagnosis='Flu', prescription='Rest',
    )
    MedicalRecord.objects.create(
        patient=patient, doctor=doctor, visit_date=now - timedelta(days=1), diagnosis='Cold', prescription='Tea',
    )
    r = admin_client.get('/api/doctors.getPatients', {'doctor_id': doctor.id})
    rows = r.json()['data']
    assert [row['medical_record']['id'] for row in rows] == [today.id]
    assert rows[0]['patient']['full_name'] == 'John Doe'


def test_patients_on_a_given_day(doctor, patient):
    yesterday = timezone.localdate() - timedelta(days=1)
    MedicalRecord.objects.create(
        patient=patient, doctor=doctor, visit_date=timezone.now() - timedelta(days=1),
        diagnosis='Cold', prescription='Tea',
    )
    rows = doctor_service.doctor_patients(doctor.id, yesterday)
    assert [row['medical_record'].diagnosis for row in rows] == ['Cold']


def test_unknown_doctor_has_no_patients():
    assert doctor_service.doctor_patients(99999) == []


def test_receptionists_cannot_list_doctor_patients(receptionist_client, doctor):
    r = receptionist_client.get('/api/doctors.getPatients', {'doctor_id': doctor.id})
    assert r.status_code == 403
