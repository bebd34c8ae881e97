import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from care.exceptions import Conflict, HasDependents, InactiveAccount, InvalidCredentials, NotFound
from care.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

User = get_user_model()

UPDATABLE_FIELDS = ('username', 'full_name', 'role', 'is_active')


def _ensure_username_free(username: str, *, exclude_id: Optional[int] = None) -> None:
    qs = User.objects.filter(username=username)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise Conflict(f"Username '{username}' already exists", entity='User')


def create_user(*, username: str, password: str, full_name: str, role: str, is_active: bool = True) -> User:
    _ensure_username_free(username)
    try:
        with transaction.atomic():
            user = User.objects.create(
                username=username,
                password=hash_password(password),
                full_name=full_name,
                role=role,
                is_active=is_active,
            )
    except IntegrityError as e:
        raise Conflict(f"Username '{username}' already exists", entity='User') from e
    logger.info('user %s created (id=%s, role=%s)', username, user.id, role)
    return user


def list_users():
    return User.objects.order_by('id')


def get_user(user_id: int) -> Optional[User]:
    return User.objects.filter(id=user_id).first()


def update_user(user_id: int, **fields) -> User:
    """Apply the given fields; a ``password`` is re-hashed before storing."""
    user = get_user(user_id)
    if user is None:
        raise NotFound('User', user_id)
    if 'username' in fields and fields['username'] != user.username:
        _ensure_username_free(fields['username'], exclude_id=user.id)
    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(user, field, fields[field])
    if fields.get('password'):
        user.password = hash_password(fields['password'])
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError as e:
        raise Conflict(f"Username '{user.username}' already exists", entity='User', entity_id=user.id) from e
    logger.info('user %s updated: %s', user.id, sorted(fields))
    return user


def delete_user(user_id: int) -> bool:
    user = get_user(user_id)
    if user is None:
        raise NotFound('User', user_id)
    try:
        with transaction.atomic():
            user.delete()
    except ProtectedError as e:
        raise HasDependents(
            f'Cannot delete user with ID {user_id} because it has related records',
            entity='User', entity_id=user_id,
        ) from e
    logger.info('user %s deleted', user_id)
    return True


def login(*, username: str, password: str) -> User:
    """Check credentials; unknown user and wrong password fail identically."""
    user = User.objects.filter(username=username).first()
    if user is None or not verify_password(password, user.password):
        logger.warning('failed login for %r', username)
        raise InvalidCredentials()
    if not user.is_active:
        logger.warning('login refused for inactive account %s', user.id)
        raise InactiveAccount()
    return user
