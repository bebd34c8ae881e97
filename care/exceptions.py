"""
Domain exceptions raised by the services.

Services raise these directly; ``care.exception_handler`` turns them into
responses.
"""
from __future__ import annotations

from rest_framework import exceptions, status


class NotFound(exceptions.NotFound):
    """An entity addressed by id does not exist."""

    def __init__(self, entity: str, entity_id, detail: str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(detail or f'{entity} with ID {entity_id} not found')


class ReferencedEntityNotFound(NotFound):
    """A foreign key given in the input points at a missing row."""


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict with the current state of the resource.'
    default_code = 'conflict'

    def __init__(self, detail: str | None = None, *, entity: str | None = None, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(detail)


class HasDependents(Conflict):
    """Deletion refused while other rows still reference the entity."""


class Unauthorized(exceptions.AuthenticationFailed):
    default_detail = 'Authentication failed.'
    default_code = 'unauthorized'


class InvalidCredentials(Unauthorized):
    default_detail = 'Invalid username or password'
    default_code = 'invalid_credentials'


class InactiveAccount(Unauthorized):
    default_detail = 'Account is inactive'
    default_code = 'inactive_account'


class TokenError(Unauthorized):
    default_detail = 'Invalid or expired token'
    default_code = 'invalid_token'


class MalformedToken(TokenError):
    default_detail = 'Invalid or expired token: malformed'
    default_code = 'malformed_token'


class BadSignature(TokenError):
    default_detail = 'Invalid or expired token: bad signature'
    default_code = 'bad_signature'


class Expired(TokenError):
    default_detail = 'Invalid or expired token: expired'
    default_code = 'token_expired'


class AccountInactiveOrMissing(TokenError):
    default_detail = 'User not found or inactive'
    default_code = 'account_inactive_or_missing'
