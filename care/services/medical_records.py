import logging
from typing import Optional

from care.exceptions import HasDependents, NotFound, ReferencedEntityNotFound
from care.models import Doctor, MedicalRecord, Patient, Payment
from care.services.windows import local_day_bounds

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('diagnosis', 'prescription', 'notes')


def create_medical_record(*, patient_id: int, doctor_id: int, visit_date, diagnosis: str,
                          prescription: str, notes: Optional[str] = None) -> MedicalRecord:
    if not Patient.objects.filter(id=patient_id).exists():
        raise ReferencedEntityNotFound('Patient', patient_id)
    if not Doctor.objects.filter(id=doctor_id).exists():
        raise ReferencedEntityNotFound('Doctor', doctor_id)
    record = MedicalRecord.objects.create(
        patient_id=patient_id,
        doctor_id=doctor_id,
        visit_date=visit_date,
        diagnosis=diagnosis,
        prescription=prescription,
        notes=notes or None,
    )
    logger.info('medical record %s created (patient=%s, doctor=%s)', record.id, patient_id, doctor_id)
    return record


def list_medical_records():
    return MedicalRecord.objects.order_by('-visit_date', '-id')


def get_medical_record(record_id: int) -> Optional[MedicalRecord]:
    return MedicalRecord.objects.filter(id=record_id).first()


def update_medical_record(record_id: int, **fields) -> MedicalRecord:
    record = get_medical_record(record_id)
    if record is None:
        raise NotFound('Medical record', record_id)
    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(record, field, fields[field])
    record.save()
    logger.info('medical record %s updated: %s', record.id, sorted(fields))
    return record


def delete_medical_record(record_id: int) -> bool:
    record = get_medical_record(record_id)
    if record is None:
        raise NotFound('Medical record', record_id)
    if Payment.objects.filter(medical_record_id=record_id).exists():
        raise HasDependents(
            f'Cannot delete medical record with ID {record_id} because it has related payments',
            entity='Medical record', entity_id=record_id,
        )
    record.delete()
    logger.info('medical record %s deleted', record_id)
    return True


def patient_history(patient_id: int, *, limit: int = 50, offset: int = 0):
    if not Patient.objects.filter(id=patient_id).exists():
        raise NotFound('Patient', patient_id)
    qs = MedicalRecord.objects.filter(patient_id=patient_id).order_by('-visit_date', '-id')
    return qs[offset:offset + limit]


def todays_records(doctor_id: int):
    if not Doctor.objects.filter(id=doctor_id).exists():
        raise NotFound('Doctor', doctor_id)
    start, end = local_day_bounds()
    return MedicalRecord.objects.filter(
        doctor_id=doctor_id, visit_date__gte=start, visit_date__lt=end,
    ).order_by('-visit_date', '-id')
