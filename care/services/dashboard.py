"""
Role-specific dashboard aggregates.

Every window starts at local midnight (see ``care.services.windows``).
Money values are rendered as two-decimal strings so that JSON clients
never see binary floats.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.utils import timezone

from care.models import Doctor, MedicalRecord, Patient, Payment
from care.services.payments import money
from care.services.windows import period_starts

logger = logging.getLogger(__name__)

User = get_user_model()

RECENT_RECORDS = 5
RECENT_PAYMENTS = 5
ACTIVITIES_PER_KIND = 3
ACTIVITIES_LIMIT = 10


def format_money(value) -> str:
    return str(money(value))


def _sum(qs) -> str:
    return format_money(qs.aggregate(total=Sum('total_amount'))['total'])


def record_item(record: MedicalRecord) -> dict:
    return {
        'id': record.id,
        'patient_id': record.patient_id,
        'patient_name': record.patient.full_name,
        'doctor_id': record.doctor_id,
        'doctor_name': record.doctor.user.full_name,
        'visit_date': record.visit_date,
        'diagnosis': record.diagnosis,
        'prescription': record.prescription,
        'notes': record.notes,
    }


def payment_item(payment: Payment) -> dict:
    return {
        'id': payment.id,
        'patient_id': payment.patient_id,
        'patient_name': payment.patient.full_name,
        'receipt_number': payment.receipt_number,
        'total_amount': format_money(payment.total_amount),
        'payment_date': payment.payment_date,
    }


def _records():
    return MedicalRecord.objects.select_related('patient', 'doctor__user')


def _admin_stats(now) -> dict:
    starts = period_starts(now)
    patients = Patient.objects.all()
    today_records = MedicalRecord.objects.filter(visit_date__gte=starts.today, visit_date__lt=starts.tomorrow)
    payments = Payment.objects.filter(payment_date__lt=starts.tomorrow)
    return {
        'patients': {
            'total': patients.count(),
            'new_today': patients.filter(created_at__gte=starts.today, created_at__lt=starts.tomorrow).count(),
            'new_this_week': patients.filter(created_at__gte=starts.week, created_at__lt=starts.tomorrow).count(),
            'new_this_month': patients.filter(created_at__gte=starts.month, created_at__lt=starts.tomorrow).count(),
        },
        'doctors': {
            'total': Doctor.objects.count(),
            'active_today': today_records.aggregate(n=Count('doctor_id', distinct=True))['n'],
        },
        'appointments_today': today_records.count(),
        'revenue': {
            'today': _sum(payments.filter(payment_date__gte=starts.today)),
            'this_week': _sum(payments.filter(payment_date__gte=starts.week)),
            'this_month': _sum(payments.filter(payment_date__gte=starts.month)),
        },
        'recent_activities': recent_activities(),
    }


def _doctor_stats(user_id: int, now) -> dict:
    doctor = Doctor.objects.filter(user_id=user_id).first()
    if doctor is None:
        return {
            'patients_today': 0,
            'total_patients_treated': 0,
            'recent_medical_records': [],
            'upcoming_schedule': [],
        }
    starts = period_starts(now)
    own = MedicalRecord.objects.filter(doctor_id=doctor.id)
    today = own.filter(visit_date__gte=starts.today, visit_date__lt=starts.tomorrow)
    now = now or timezone.now()
    upcoming = (
        _records()
        .filter(doctor_id=doctor.id, visit_date__gte=now, visit_date__lt=starts.tomorrow)
        .order_by('visit_date', 'id')
    )
    recent = _records().filter(doctor_id=doctor.id).order_by('-visit_date', '-id')[:RECENT_RECORDS]
    return {
        'patients_today': today.aggregate(n=Count('patient_id', distinct=True))['n'],
        'total_patients_treated': own.aggregate(n=Count('patient_id', distinct=True))['n'],
        'recent_medical_records': [record_item(r) for r in recent],
        'upcoming_schedule': [record_item(r) for r in upcoming],
    }


def _receptionist_stats(user_id: int, now) -> dict:
    starts = period_starts(now)
    # registrations are clinic-wide; charges are scoped to this cashier
    mine_today = Payment.objects.filter(
        cashier_id=user_id, payment_date__gte=starts.today, payment_date__lt=starts.tomorrow,
    )
    recent = (
        Payment.objects.select_related('patient')
        .filter(cashier_id=user_id)
        .order_by('-payment_date', '-id')[:RECENT_PAYMENTS]
    )
    return {
        'patients_registered_today': Patient.objects.filter(
            created_at__gte=starts.today, created_at__lt=starts.tomorrow,
        ).count(),
        'payments_processed_today': mine_today.count(),
        'revenue_today': _sum(mine_today),
        'recent_payments': [payment_item(p) for p in recent],
    }


def dashboard_stats(user_id: int, role: str, *, now=None) -> dict:
    if role == User.ROLE_ADMIN:
        return _admin_stats(now)
    if role == User.ROLE_DOCTOR:
        return _doctor_stats(user_id, now)
    if role == User.ROLE_RECEPTIONIST:
        return _receptionist_stats(user_id, now)
    logger.debug('no dashboard for role %r', role)
    return {}


def recent_activities() -> list[dict]:
    """Latest registrations, visits and payments merged newest first."""
    items: list[dict] = []
    for p in Patient.objects.order_by('-created_at', '-id')[:ACTIVITIES_PER_KIND]:
        items.append({
            'type': 'patient_registration',
            'entity_id': p.id,
            'description': f'New patient registered: {p.full_name} ({p.medical_record_number})',
            'timestamp': p.created_at,
        })
    for r in _records().order_by('-created_at', '-id')[:ACTIVITIES_PER_KIND]:
        items.append({
            'type': 'medical_record',
            'entity_id': r.id,
            'description': f'Medical record created for {r.patient.full_name} by {r.doctor.user.full_name}',
            'timestamp': r.created_at,
        })
    for pay in Payment.objects.select_related('patient').order_by('-payment_date', '-id')[:ACTIVITIES_PER_KIND]:
        items.append({
            'type': 'payment',
            'entity_id': pay.id,
            'description': (
                f'Payment {pay.receipt_number} of {format_money(pay.total_amount)} '
                f'received from {pay.patient.full_name}'
            ),
            'timestamp': pay.payment_date,
        })
    items.sort(key=lambda item: item['timestamp'], reverse=True)
    return items[:ACTIVITIES_LIMIT]


def todays_schedule(account_id: Optional[int] = None, *, now=None) -> list[dict]:
    starts = period_starts(now)
    qs = _records().filter(visit_date__gte=starts.today, visit_date__lt=starts.tomorrow)
    if account_id is not None:
        doctor = Doctor.objects.filter(user_id=account_id).first()
        if doctor is None:
            return []
        qs = qs.filter(doctor_id=doctor.id)
    return [record_item(r) for r in qs.order_by('visit_date', 'id')]
