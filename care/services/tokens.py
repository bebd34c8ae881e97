"""
Stateless session tokens.

A token is a compact JWT (``header.payload.signature``) signed with
HMAC-SHA256 over the claims ``sub``, ``username``, ``role``, ``iat`` and
``exp``.  Nothing is stored server side: revocation happens by
deactivating or deleting the account, which ``authenticate_token``
re-checks on every use.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model

from care.exceptions import AccountInactiveOrMissing, BadSignature, Expired, MalformedToken

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass(frozen=True)
class Claims:
    user_id: int
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    def __init__(self, signing_key: str, *, algorithm: str = 'HS256', lifetime: timedelta = timedelta(hours=24)):
        if not signing_key:
            raise ValueError('a signing key is required')
        self.signing_key = signing_key
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, subject_id: int, username: str, role: str, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(dt_timezone.utc)
        payload = {
            'sub': str(subject_id),
            'username': username,
            'role': role,
            'iat': int(now.timestamp()),
            'exp': int((now + self.lifetime).timestamp()),
        }
        return jwt.encode(payload, self.signing_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Claims:
        segments = (token or '').split('.')
        if len(segments) != 3 or not all(segments):
            raise MalformedToken()
        try:
            # PyJWT checks the signature before the registered claims
            payload = jwt.decode(
                token,
                self.signing_key,
                algorithms=[self.algorithm],
                options={'require': ['sub', 'exp']},
            )
        except jwt.InvalidSignatureError as e:
            raise BadSignature() from e
        except jwt.ExpiredSignatureError as e:
            raise Expired() from e
        except jwt.InvalidTokenError as e:
            raise MalformedToken() from e
        try:
            return Claims(
                user_id=int(payload['sub']),
                username=payload.get('username', ''),
                role=payload.get('role', ''),
                issued_at=datetime.fromtimestamp(payload.get('iat', 0), tz=dt_timezone.utc),
                expires_at=datetime.fromtimestamp(payload['exp'], tz=dt_timezone.utc),
            )
        except (TypeError, ValueError) as e:
            raise MalformedToken() from e


def get_token_codec() -> TokenCodec:
    conf = settings.CLINIC_AUTH
    return TokenCodec(conf['SIGNING_KEY'], algorithm=conf['ALGORITHM'], lifetime=conf['TOKEN_LIFETIME'])


def issue_token(user) -> str:
    return get_token_codec().issue(user.id, user.username, user.role)


def authenticate_token(token: str, codec: Optional[TokenCodec] = None):
    """Verify *token* and return the still-active account it names."""
    claims = (codec or get_token_codec()).verify(token)
    user = User.objects.filter(id=claims.user_id).first()
    if user is None or not user.is_active:
        logger.warning('token for user %s rejected: account missing or inactive', claims.user_id)
        raise AccountInactiveOrMissing()
    return user
