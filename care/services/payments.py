import logging
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Sum

from care.exceptions import Conflict, ReferencedEntityNotFound
from care.models import MedicalRecord, Patient, Payment
from care.services.windows import period_starts

logger = logging.getLogger(__name__)

User = get_user_model()

CENT = Decimal('0.01')


def money(value) -> Decimal:
    if value is None:
        value = 0
    return Decimal(str(value)).quantize(CENT)


def _ensure_receipt_free(receipt_number: str) -> None:
    if Payment.objects.filter(receipt_number=receipt_number).exists():
        raise Conflict(f"Receipt number '{receipt_number}' already exists", entity='Payment')


def create_payment(*, patient_id: int, cashier_id: int, doctor_service_fee, medicine_fee,
                   receipt_number: str, medical_record_id: Optional[int] = None) -> Payment:
    if not Patient.objects.filter(id=patient_id).exists():
        raise ReferencedEntityNotFound('Patient', patient_id)
    if medical_record_id is not None and not MedicalRecord.objects.filter(id=medical_record_id).exists():
        raise ReferencedEntityNotFound('Medical record', medical_record_id)
    if not User.objects.filter(id=cashier_id, is_active=True).exists():
        raise ReferencedEntityNotFound(
            'Cashier', cashier_id, detail=f'Cashier with ID {cashier_id} not found or inactive',
        )
    _ensure_receipt_free(receipt_number)

    service_fee = money(doctor_service_fee)
    medicine = money(medicine_fee)
    try:
        with transaction.atomic():
            payment = Payment.objects.create(
                patient_id=patient_id,
                medical_record_id=medical_record_id,
                cashier_id=cashier_id,
                doctor_service_fee=service_fee,
                medicine_fee=medicine,
                total_amount=service_fee + medicine,
                receipt_number=receipt_number,
            )
    except IntegrityError as e:
        raise Conflict(f"Receipt number '{receipt_number}' already exists", entity='Payment') from e
    logger.info('payment %s recorded: %s (receipt %s)', payment.id, payment.total_amount, receipt_number)
    return payment


def list_payments():
    return Payment.objects.order_by('-payment_date', '-id')


def get_payment(payment_id: int) -> Optional[Payment]:
    return Payment.objects.filter(id=payment_id).first()


def payment_history(*, patient_id: Optional[int] = None, start_date=None, end_date=None,
                    limit: int = 50, offset: int = 0):
    qs = Payment.objects.all()
    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)
    if start_date is not None:
        qs = qs.filter(payment_date__gte=start_date)
    if end_date is not None:
        qs = qs.filter(payment_date__lte=end_date)
    return qs.order_by('-payment_date', '-id')[offset:offset + limit]


def payment_receipt(payment_id: int) -> Optional[dict]:
    payment = Payment.objects.select_related('patient', 'cashier', 'medical_record').filter(id=payment_id).first()
    if payment is None:
        return None
    return {
        'clinic': dict(settings.CLINIC_INFO),
        'payment': {
            'id': payment.id,
            'receipt_number': payment.receipt_number,
            'payment_date': payment.payment_date,
            'doctor_service_fee': payment.doctor_service_fee,
            'medicine_fee': payment.medicine_fee,
            'total_amount': payment.total_amount,
            'medical_record_id': payment.medical_record_id,
        },
        'patient': {
            'id': payment.patient.id,
            'full_name': payment.patient.full_name,
            'medical_record_number': payment.patient.medical_record_number,
            'phone_number': payment.patient.phone_number,
            'address': payment.patient.address,
        },
        'cashier': {
            'id': payment.cashier.id,
            'full_name': payment.cashier.full_name,
        },
    }


def _window_totals(qs) -> dict:
    agg = qs.aggregate(total=Sum('total_amount'), count=Count('id'))
    return {'total_amount': money(agg['total']), 'transaction_count': agg['count']}


def payment_statistics(now=None) -> dict:
    starts = period_starts(now)
    qs = Payment.objects.all()
    return {
        'today': _window_totals(qs.filter(payment_date__gte=starts.today, payment_date__lt=starts.tomorrow)),
        'this_week': _window_totals(qs.filter(payment_date__gte=starts.week, payment_date__lt=starts.tomorrow)),
        'this_month': _window_totals(qs.filter(payment_date__gte=starts.month, payment_date__lt=starts.tomorrow)),
    }
