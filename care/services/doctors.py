import logging
from datetime import date as date_cls
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from care.exceptions import Conflict, HasDependents, NotFound, ReferencedEntityNotFound
from care.models import Doctor, MedicalRecord
from care.services.windows import local_day_bounds

logger = logging.getLogger(__name__)

User = get_user_model()

UPDATABLE_FIELDS = ('specialization', 'practice_schedule')


def create_doctor(*, user_id: int, specialization: str, practice_schedule: str) -> Doctor:
    user = User.objects.filter(id=user_id).first()
    if user is None:
        raise ReferencedEntityNotFound('User', user_id)
    if user.role != User.ROLE_DOCTOR:
        raise ValidationError({'user_id': [f'User with ID {user_id} must have doctor role']})
    if Doctor.objects.filter(user_id=user_id).exists():
        raise Conflict(f'Doctor profile already exists for user {user_id}', entity='User', entity_id=user_id)
    try:
        with transaction.atomic():
            doctor = Doctor.objects.create(
                user=user, specialization=specialization, practice_schedule=practice_schedule,
            )
    except IntegrityError as e:
        raise Conflict(f'Doctor profile already exists for user {user_id}', entity='User', entity_id=user_id) from e
    logger.info('doctor profile %s created for user %s', doctor.id, user_id)
    return doctor


def list_doctors():
    return Doctor.objects.select_related('user').order_by('id')


def get_doctor(doctor_id: int) -> Optional[Doctor]:
    return Doctor.objects.select_related('user').filter(id=doctor_id).first()


def update_doctor(doctor_id: int, **fields) -> Doctor:
    doctor = get_doctor(doctor_id)
    if doctor is None:
        raise NotFound('Doctor', doctor_id)
    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(doctor, field, fields[field])
    doctor.save()
    logger.info('doctor profile %s updated: %s', doctor.id, sorted(fields))
    return doctor


def delete_doctor(doctor_id: int) -> bool:
    doctor = get_doctor(doctor_id)
    if doctor is None:
        raise NotFound('Doctor', doctor_id)
    if MedicalRecord.objects.filter(doctor_id=doctor_id).exists():
        raise HasDependents(
            f'Cannot delete doctor with ID {doctor_id} because it has existing medical records',
            entity='Doctor', entity_id=doctor_id,
        )
    doctor.delete()
    logger.info('doctor profile %s deleted', doctor_id)
    return True


def doctor_patients(doctor_id: int, day: Optional[date_cls] = None) -> list[dict]:
    """Patients seen by a doctor on one local day, paired with the visit."""
    start, end = local_day_bounds(day)
    records = (
        MedicalRecord.objects.select_related('patient')
        .filter(doctor_id=doctor_id, visit_date__gte=start, visit_date__lt=end)
        .order_by('visit_date', 'id')
    )
    return [{'patient': r.patient, 'medical_record': r} for r in records]
