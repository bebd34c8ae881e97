"""
Account management endpoints (``users.*``), administrators only.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import IdSerializer
from care.serializers.users import UserCreateSerializer, UserSerializer, UserUpdateSerializer
from care.services import users as user_service
from care.services.audit import log_action

from ..permissions import IsAdminRole
from .common import ok, validated, without_id


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def create_user(request):
    vd = validated(UserCreateSerializer, request.data)
    user = user_service.create_user(**vd)
    log_action(user=request.user, action='user.create', object_type='user', object_id=user.id,
               detail={'username': user.username, 'role': user.role})
    return ok(UserSerializer(user).data, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def list_users(request):
    return ok(UserSerializer(user_service.list_users(), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def get_user(request):
    vd = validated(IdSerializer, request.query_params)
    user = user_service.get_user(vd['id'])
    return ok(UserSerializer(user).data if user else None)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def update_user(request):
    vd = validated(UserUpdateSerializer, request.data)
    fields = without_id(vd)
    user = user_service.update_user(vd['id'], **fields)
    log_action(user=request.user, action='user.update', object_type='user', object_id=user.id,
               detail={'fields': sorted(fields)})
    return ok(UserSerializer(user).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def delete_user(request):
    vd = validated(IdSerializer, request.data)
    user_service.delete_user(vd['id'])
    log_action(user=request.user, action='user.delete', object_type='user', object_id=vd['id'])
    return ok({'success': True})
