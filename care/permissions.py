"""
Role based permission classes.

Each class answers a single question about ``request.user.role``; views
combine them with ``IsAuthenticated``.
"""
from rest_framework.permissions import BasePermission

from .models import User

ROLE_ADMIN = User.ROLE_ADMIN
ROLE_DOCTOR = User.ROLE_DOCTOR
ROLE_RECEPTIONIST = User.ROLE_RECEPTIONIST


def _has_role(request, roles) -> bool:
    user = getattr(request, "user", None)
    return bool(user and user.is_authenticated and getattr(user, "role", None) in roles)


class IsAdminRole(BasePermission):
    """Allow access only to administrators."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, {ROLE_ADMIN})


class IsAdminOrReceptionist(BasePermission):
    """Front desk work: administrators and receptionists."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, {ROLE_ADMIN, ROLE_RECEPTIONIST})


class IsAdminOrDoctor(BasePermission):
    """Clinical work: administrators and doctors."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, {ROLE_ADMIN, ROLE_DOCTOR})


class IsDoctorProfileOwner(BasePermission):
    """Admins, or the doctor whose profile is the object (expects ``obj.user_id``)."""
    def has_object_permission(self, request, view, obj) -> bool:
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if getattr(user, "role", None) == ROLE_ADMIN:
            return True
        return getattr(obj, "user_id", None) == user.id
