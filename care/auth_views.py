"""
Authentication views.

``auth.login`` exchanges a username and password for a signed session
token; ``auth.validateToken`` reports who a token belongs to.  Neither
requires a bearer token, and neither reads the ``Authorization`` header, so a
stale one cannot get in the way; failures still answer 401 with a Bearer
challenge.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny

from care.authentication import BearerChallengeOnly
from care.exceptions import Unauthorized
from care.serializers.auth import LoginSerializer, ValidateTokenSerializer
from care.serializers.users import UserSerializer
from care.services import users as user_service
from care.services.audit import log_action
from care.services.tokens import authenticate_token, issue_token

from .views.common import ok, validated


@api_view(['POST'])
@authentication_classes([BearerChallengeOnly])
@permission_classes([AllowAny])
def login_view(request):
    vd = validated(LoginSerializer, request.data)
    ip = request.META.get('REMOTE_ADDR')
    try:
        user = user_service.login(username=vd['username'], password=vd['password'])
    except Unauthorized as e:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'reason': e.default_code, 'username': vd['username'], 'ip': ip})
        raise
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})
    return ok({'user': UserSerializer(user).data, 'token': issue_token(user)})

# ScopedRateThrottle reads throttle_scope from the wrapped APIView class
login_view.cls.throttle_scope = 'login'


@api_view(['GET'])
@authentication_classes([BearerChallengeOnly])
@permission_classes([AllowAny])
def validate_token_view(request):
    vd = validated(ValidateTokenSerializer, request.query_params)
    user = authenticate_token(vd['token'])
    return ok({'id': user.id, 'username': user.username, 'role': user.role})
