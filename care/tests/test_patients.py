from datetime import timedelta

import pytest
from django.utils import timezone

from care.exceptions import Conflict
from care.models import AuditEvent, MedicalRecord, Patient
from care.services import patients as patient_service

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    payload = {
        'medical_record_number': 'MRN001',
        'full_name': 'John Doe',
        'phone_number': '555-0100',
        'address': '12 Elm Street',
        'date_of_birth': '1985-04-12',
    }
    payload.update(overrides)
    return payload


def test_register_and_fetch(receptionist_client):
    r = receptionist_client.post('/api/patients.create', _payload(), format='json')
    assert r.status_code == 201
    created = r.json()['data']
    assert created['medical_record_number'] == 'MRN001'
    assert created['date_of_birth'] == '1985-04-12'

    r = receptionist_client.get('/api/patients.getById', {'id': created['id']})
    assert r.json()['data']['full_name'] == 'John Doe'


def test_duplicate_record_number_is_rejected(admin_client):
    assert admin_client.post('/api/patients.create', _payload(), format='json').status_code == 201
    r = admin_client.post('/api/patients.create', _payload(full_name='Jane Roe'), format='json')
    assert r.status_code == 409
    assert "MRN001" in r.json()['error']['message']
    assert Patient.objects.count() == 1


def test_markup_is_stripped_from_names(admin_client):
    r = admin_client.post('/api/patients.create', _payload(full_name='<b>John</b> Doe'), format='json')
    assert r.json()['data']['full_name'] == 'John Doe'


def test_ampersands_and_angle_brackets_survive(admin_client):
    r = admin_client.post('/api/patients.create', _payload(
        full_name='Smith & Jones', address='1 A < B Street',
    ), format='json')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['full_name'] == 'Smith & Jones'
    assert data['address'] == '1 A < B Street'
    assert Patient.objects.get(id=data['id']).address == '1 A < B Street'


def test_search_is_case_insensitive_substring(doctor_client):
    patient_service.create_patient(**_payload())
    patient_service.create_patient(**_payload(
        medical_record_number='MRN002', full_name='Mary Major', phone_number='555-0199',
    ))
    r = doctor_client.get('/api/patients.search', {'query': 'john'})
    assert [p['full_name'] for p in r.json()['data']] == ['John Doe']

    r = doctor_client.get('/api/patients.search', {'query': '555-01'})
    assert [p['medical_record_number'] for p in r.json()['data']] == ['MRN001', 'MRN002']

    r = doctor_client.get('/api/patients.search', {'query': 'mrn002'})
    assert [p['full_name'] for p in r.json()['data']] == ['Mary Major']


def test_search_paginates(admin_client):
    for i in range(5):
        patient_service.create_patient(**_payload(medical_record_number=f'MRN10{i}', full_name=f'John {i}'))
    r = admin_client.get('/api/patients.search', {'query': 'john', 'limit': 2, 'offset': 2})
    assert [p['full_name'] for p in r.json()['data']] == ['John 2', 'John 3']


def test_search_requires_a_query(admin_client):
    r = admin_client.get('/api/patients.search', {'query': ''})
    assert r.status_code == 400


def test_list_with_limit_and_offset(admin_client):
    for i in range(3):
        patient_service.create_patient(**_payload(medical_record_number=f'MRN20{i}'))
    r = admin_client.get('/api/patients.getAll', {'limit': 1, 'offset': 1})
    assert [p['medical_record_number'] for p in r.json()['data']] == ['MRN201']
    assert len(admin_client.get('/api/patients.getAll').json()['data']) == 3


def test_partial_update_advances_updated_at(admin_client):
    patient = patient_service.create_patient(**_payload())
    past = timezone.now() - timedelta(hours=3)
    Patient.objects.filter(id=patient.id).update(updated_at=past)

    r = admin_client.post('/api/patients.update', {'id': patient.id, 'phone_number': '555-0111'}, format='json')
    assert r.status_code == 200

    patient.refresh_from_db()
    assert patient.phone_number == '555-0111'
    assert patient.full_name == 'John Doe'
    assert patient.address == '12 Elm Street'
    assert patient.updated_at > past


def test_update_to_existing_record_number_conflicts():
    patient_service.create_patient(**_payload())
    other = patient_service.create_patient(**_payload(medical_record_number='MRN002'))
    with pytest.raises(Conflict):
        patient_service.update_patient(other.id, medical_record_number='MRN001')


def test_update_keeping_own_record_number_is_allowed():
    patient = patient_service.create_patient(**_payload())
    updated = patient_service.update_patient(patient.id, medical_record_number='MRN001', full_name='John Q. Doe')
    assert updated.full_name == 'John Q. Doe'


def test_update_is_audited(admin_client, admin_user):
    patient = patient_service.create_patient(**_payload())
    r = admin_client.post('/api/patients.update', {
        'id': patient.id, 'phone_number': '555-0111', 'address': '14 Elm Street',
    }, format='json')
    assert r.status_code == 200
    event = AuditEvent.objects.get(action='patient.update', object_id=patient.id)
    assert event.user == admin_user
    assert event.detail == {'fields': ['address', 'phone_number']}


def _insert_duplicate_first(monkeypatch, number):
    """Let another registration take *number* just after the pre-check passes."""
    def racing_check(*args, **kwargs):
        Patient.objects.create(
            medical_record_number=number, full_name='Concurrent Patient', phone_number='555-0999',
            address='9 Oak Road', date_of_birth='1990-01-01',
        )
    monkeypatch.setattr(patient_service, '_ensure_record_number_free', racing_check)


def test_concurrent_registration_conflicts(monkeypatch):
    _insert_duplicate_first(monkeypatch, 'MRN001')
    with pytest.raises(Conflict) as excinfo:
        patient_service.create_patient(**_payload())
    assert 'MRN001' in str(excinfo.value.detail)
    assert Patient.objects.filter(medical_record_number='MRN001').count() == 1


def test_concurrent_renumbering_conflicts(monkeypatch):
    patient = patient_service.create_patient(**_payload(medical_record_number='MRN002'))
    _insert_duplicate_first(monkeypatch, 'MRN001')
    with pytest.raises(Conflict):
        patient_service.update_patient(patient.id, medical_record_number='MRN001')
    patient.refresh_from_db()
    assert patient.medical_record_number == 'MRN002'


def test_doctors_cannot_register_patients(doctor_client):
    r = doctor_client.post('/api/patients.create', _payload(), format='json')
    assert r.status_code == 403


def test_only_admins_delete(admin_client, receptionist_client):
    patient = patient_service.create_patient(**_payload())
    assert receptionist_client.post('/api/patients.delete', {'id': patient.id}, format='json').status_code == 403
    r = admin_client.post('/api/patients.delete', {'id': patient.id}, format='json')
    assert r.json()['data'] == {'success': True}
    assert admin_client.get('/api/patients.getById', {'id': patient.id}).json()['data'] is None


def test_delete_patient_with_records_is_blocked(admin_client, doctor):
    patient = patient_service.create_patient(**_payload())
    MedicalRecord.objects.create(
        patient=patient, doctor=doctor, visit_date=timezone.now(), diagnosis='Flu', prescription='Rest',
    )
    r = admin_client.post('/api/patients.delete', {'id': patient.id}, format='json')
    assert r.status_code == 409
    assert Patient.objects.filter(id=patient.id).exists()


def test_delete_missing_patient_is_not_found(admin_client):
    r = admin_client.post('/api/patients.delete', {'id': 99999}, format='json')
    assert r.status_code == 404
    assert r.json()['error']['message'] == 'Patient with ID 99999 not found'
