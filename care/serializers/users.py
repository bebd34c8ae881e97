from django.contrib.auth import get_user_model
from rest_framework import serializers

from .common import IdSerializer, clean_text

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    # the credential digest never leaves the server
    class Meta:
        model = User
        fields = ['id', 'username', 'full_name', 'role', 'is_active', 'created_at', 'updated_at']
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, trim_whitespace=False, write_only=True)
    full_name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)
    is_active = serializers.BooleanField(required=False, default=True)

    def validate_full_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Full name is required')
        return v


class UserUpdateSerializer(IdSerializer):
    username = serializers.CharField(max_length=150, required=False)
    password = serializers.CharField(min_length=6, trim_whitespace=False, required=False, write_only=True)
    full_name = serializers.CharField(max_length=255, required=False)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)
    is_active = serializers.BooleanField(required=False)

    validate_full_name = UserCreateSerializer.validate_full_name
