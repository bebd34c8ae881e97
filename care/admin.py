"""
Django admin registrations for the clinic models.

Hooks every model into the built-in admin at ``/admin/`` for manual
inspection and fixes; the RPC API remains the primary interface.
"""

from django.contrib import admin

from .models import AuditEvent, Doctor, MedicalRecord, Patient, Payment, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'full_name', 'role', 'is_active', 'created_at')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'full_name')
    exclude = ('password',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('medical_record_number', 'full_name', 'phone_number', 'date_of_birth', 'created_at')
    search_fields = ('medical_record_number', 'full_name', 'phone_number')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'specialization')
    search_fields = ('user__username', 'user__full_name', 'specialization')


@admin.register(MedicalRecord)
class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'visit_date')
    list_filter = ('doctor',)
    search_fields = ('patient__full_name', 'patient__medical_record_number', 'diagnosis')
    date_hierarchy = 'visit_date'


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('receipt_number', 'patient', 'cashier', 'total_amount', 'payment_date')
    list_filter = ('cashier',)
    search_fields = ('receipt_number', 'patient__full_name')
    date_hierarchy = 'payment_date'
    readonly_fields = ('total_amount',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'action', 'object_type', 'object_id')
    list_filter = ('action', 'object_type')
    search_fields = ('action', 'object_type')
