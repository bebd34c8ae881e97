import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError, Q

from care.exceptions import Conflict, HasDependents, NotFound
from care.models import Patient

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('medical_record_number', 'full_name', 'phone_number', 'address', 'date_of_birth')


def _ensure_record_number_free(number: str, *, exclude_id: Optional[int] = None) -> None:
    qs = Patient.objects.filter(medical_record_number=number)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise Conflict(f"Medical record number '{number}' already exists", entity='Patient')


def create_patient(*, medical_record_number, full_name, phone_number, address, date_of_birth) -> Patient:
    _ensure_record_number_free(medical_record_number)
    try:
        with transaction.atomic():
            patient = Patient.objects.create(
                medical_record_number=medical_record_number,
                full_name=full_name,
                phone_number=phone_number,
                address=address,
                date_of_birth=date_of_birth,
            )
    except IntegrityError as e:
        raise Conflict(f"Medical record number '{medical_record_number}' already exists", entity='Patient') from e
    logger.info('patient %s registered (id=%s)', medical_record_number, patient.id)
    return patient


def list_patients(*, limit: Optional[int] = None, offset: int = 0):
    qs = Patient.objects.order_by('id')
    if limit:
        return qs[offset:offset + limit]
    return qs[offset:] if offset else qs


def get_patient(patient_id: int) -> Optional[Patient]:
    return Patient.objects.filter(id=patient_id).first()


def update_patient(patient_id: int, **fields) -> Patient:
    patient = get_patient(patient_id)
    if patient is None:
        raise NotFound('Patient', patient_id)
    number = fields.get('medical_record_number')
    if number is not None and number != patient.medical_record_number:
        _ensure_record_number_free(number, exclude_id=patient.id)
    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(patient, field, fields[field])
    try:
        with transaction.atomic():
            patient.save()
    except IntegrityError as e:
        raise Conflict(
            f"Medical record number '{patient.medical_record_number}' already exists",
            entity='Patient', entity_id=patient.id,
        ) from e
    logger.info('patient %s updated: %s', patient.id, sorted(fields))
    return patient


def delete_patient(patient_id: int) -> bool:
    patient = get_patient(patient_id)
    if patient is None:
        raise NotFound('Patient', patient_id)
    try:
        with transaction.atomic():
            patient.delete()
    except ProtectedError as e:
        raise HasDependents(
            f'Cannot delete patient with ID {patient_id} because it has medical records or payments',
            entity='Patient', entity_id=patient_id,
        ) from e
    logger.info('patient %s deleted', patient_id)
    return True


def search_patients(query: str, *, limit: int = 50, offset: int = 0):
    """Case-insensitive substring match on name, phone or record number."""
    qs = Patient.objects.filter(
        Q(full_name__icontains=query)
        | Q(phone_number__icontains=query)
        | Q(medical_record_number__icontains=query)
    ).order_by('id')
    return qs[offset:offset + limit]
