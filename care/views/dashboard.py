"""
Dashboard endpoints (``dashboard.*``).

``getStats`` reports on the caller unless an administrator names another
account; the content depends on that account's role.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from care.serializers.dashboard import ScheduleQuerySerializer, StatsQuerySerializer
from care.services import dashboard as dashboard_service

from ..permissions import IsAdminOrDoctor, IsAdminRole
from .common import ok, validated

User = get_user_model()


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    q = validated(StatsQuerySerializer, request.query_params)
    user = request.user
    user_id = q.get('user_id') or user.id
    role = q.get('role')
    if (user_id != user.id or (role and role != user.role)) and user.role != User.ROLE_ADMIN:
        raise PermissionDenied('Only administrators may view another account\'s dashboard')
    if not role:
        target = user if user_id == user.id else User.objects.filter(id=user_id).first()
        role = target.role if target else ''
    return ok(dashboard_service.dashboard_stats(user_id, role))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def recent_activities(request):
    return ok(dashboard_service.recent_activities())


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def todays_schedule(request):
    q = validated(ScheduleQuerySerializer, request.query_params)
    account_id = q.get('account_id')
    # doctors always see their own day
    if request.user.role == User.ROLE_DOCTOR:
        account_id = request.user.id
    return ok(dashboard_service.todays_schedule(account_id))
