from rest_framework import serializers

from care.models import Patient

from .common import IdSerializer, PageSerializer, clean_text


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            'id', 'medical_record_number', 'full_name', 'phone_number', 'address',
            'date_of_birth', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PatientCreateSerializer(serializers.Serializer):
    medical_record_number = serializers.CharField(max_length=64)
    full_name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(max_length=32)
    address = serializers.CharField()
    date_of_birth = serializers.DateField()

    def validate_full_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Full name is required')
        return v

    def validate_address(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Address is required')
        return v


class PatientUpdateSerializer(IdSerializer):
    medical_record_number = serializers.CharField(max_length=64, required=False)
    full_name = serializers.CharField(max_length=255, required=False)
    phone_number = serializers.CharField(max_length=32, required=False)
    address = serializers.CharField(required=False)
    date_of_birth = serializers.DateField(required=False)

    validate_full_name = PatientCreateSerializer.validate_full_name
    validate_address = PatientCreateSerializer.validate_address


class PatientListQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500)
    offset = serializers.IntegerField(required=False, min_value=0, default=0)


class PatientSearchSerializer(PageSerializer):
    query = serializers.CharField(min_length=1)
