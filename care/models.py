"""
Database models for the clinic backend.

These models capture the five clinic entities (accounts, patients,
doctor profiles, medical records and payments) plus an audit trail.
Field names mirror the JSON exposed by the API so that serializers can
map them one to one.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """Clinic staff account.

    Roles are 'admin', 'doctor' and 'receptionist'.  Authentication
    relies on the inherited ``username``/``password``/``is_active``
    fields; ``full_name`` replaces Django's first/last name pair.
    """
    ROLE_ADMIN = 'admin'
    ROLE_DOCTOR = 'doctor'
    ROLE_RECEPTIONIST = 'receptionist'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_RECEPTIONIST, 'Receptionist'),
    ]
    full_name = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    REQUIRED_FIELDS = ['full_name', 'role']

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    medical_record_number = models.CharField(max_length=64, unique=True)
    full_name = models.CharField(max_length=255, db_index=True)
    phone_number = models.CharField(max_length=32)
    address = models.TextField()
    date_of_birth = models.DateField()
    # registration time, counted per day/week/month on dashboards
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.full_name} ({self.medical_record_number})"


class Doctor(models.Model):
    """Doctor profile attached to an account holding the 'doctor' role.

    ``practice_schedule`` is stored verbatim; clients usually send a JSON
    document such as ``{"monday": "9:00-17:00"}``.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='doctor_profile')
    specialization = models.CharField(max_length=255)
    practice_schedule = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Dr. {self.user.full_name} ({self.specialization})"


class MedicalRecord(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='medical_records')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='medical_records')
    visit_date = models.DateTimeField()
    diagnosis = models.TextField()
    prescription = models.TextField()
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['doctor', 'visit_date'], name='record_doctor_visit_idx'),
            models.Index(fields=['patient', 'visit_date'], name='record_patient_visit_idx'),
        ]

    def __str__(self) -> str:
        return f"Record {self.id}: patient={self.patient_id} doctor={self.doctor_id} @ {self.visit_date:%F %T}"


class Payment(models.Model):
    """A billing event.  ``total_amount`` is the sum of both fees at creation."""
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='payments')
    medical_record = models.ForeignKey(
        MedicalRecord, null=True, blank=True, on_delete=models.PROTECT, related_name='payments'
    )
    cashier = models.ForeignKey(User, on_delete=models.PROTECT, related_name='cashier_payments')
    doctor_service_fee = models.DecimalField(max_digits=10, decimal_places=2)
    medicine_fee = models.DecimalField(max_digits=10, decimal_places=2)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_date = models.DateTimeField(default=timezone.now, db_index=True)
    receipt_number = models.CharField(max_length=64, unique=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'payment_date'], name='payment_patient_date_idx'),
            models.Index(fields=['cashier', 'payment_date'], name='payment_cashier_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.receipt_number}: {self.total_amount}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.object_type}#{self.object_id} by {self.user_id}"
