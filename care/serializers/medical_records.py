from rest_framework import serializers

from care.models import MedicalRecord

from .common import DATETIME_INPUT_FORMATS, IdSerializer, PageSerializer


class MedicalRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = MedicalRecord
        fields = [
            'id', 'patient_id', 'doctor_id', 'visit_date', 'diagnosis', 'prescription', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class MedicalRecordCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1)
    doctor_id = serializers.IntegerField(min_value=1)
    visit_date = serializers.DateTimeField(input_formats=DATETIME_INPUT_FORMATS)
    diagnosis = serializers.CharField()
    prescription = serializers.CharField()
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class MedicalRecordUpdateSerializer(IdSerializer):
    diagnosis = serializers.CharField(required=False)
    prescription = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class PatientHistoryQuerySerializer(PageSerializer):
    patient_id = serializers.IntegerField(min_value=1)


class DoctorIdQuerySerializer(serializers.Serializer):
    doctor_id = serializers.IntegerField(min_value=1)
