from rest_framework import serializers

from care.models import Doctor

from .common import IdSerializer


class DoctorSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source='user.full_name', read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)

    class Meta:
        model = Doctor
        fields = [
            'id', 'user_id', 'full_name', 'username', 'specialization', 'practice_schedule',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class DoctorCreateSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
    specialization = serializers.CharField(max_length=255)
    practice_schedule = serializers.CharField(trim_whitespace=False)


class DoctorUpdateSerializer(IdSerializer):
    specialization = serializers.CharField(max_length=255, required=False)
    practice_schedule = serializers.CharField(trim_whitespace=False, required=False)


class DoctorPatientsQuerySerializer(serializers.Serializer):
    doctor_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField(required=False)
