from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission


def is_guide_or_admin(user) -> bool:
    if not (user and getattr(user, "is_authenticated", False)):
        return False
    if getattr(user, "is_staff", False):
        return True
    return bool(getattr(user, "is_group_guide", False))


class IsGroupGuideOrAdmin(BasePermission):
    """Allow access only to staff or users holding the admin/pembimbing role."""

    def has_permission(self, request, view):
        return is_guide_or_admin(getattr(request, "user", None))


class IsGroupGuideOrAdminCanWrite(BasePermission):
    """Members may read; only guides and admins may write."""

    def has_permission(self, request, view):
        u = getattr(request, "user", None)
        if request.method in SAFE_METHODS:
            return bool(u and u.is_authenticated)
        return is_guide_or_admin(u)
