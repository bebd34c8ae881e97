from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class StatsQuerySerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1, required=False)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)


class ScheduleQuerySerializer(serializers.Serializer):
    account_id = serializers.IntegerField(min_value=1, required=False)
