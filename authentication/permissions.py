from typing import Callable, Optional

from rest_framework.permissions import BasePermission

from utils import rbac


class NotBanned(BasePermission):
    """Reject authenticated users whose ban has not expired yet."""

    message = "User is banned"

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return True
        return not rbac.is_banned(user)


class RoleRequired(BasePermission):
    """Base permission that enforces a role after DB re-validation.

    Banned users fail every role gate.
    """

    role_check: Optional[Callable] = None
    message = "Insufficient role to access this resource."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return False

        if rbac.is_banned(user):
            self.message = "User is banned"
            return False

        check = type(self).role_check
        return check is None or check(user)

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class IsSellerUser(RoleRequired):
    role_check = staticmethod(rbac.is_seller)


class IsModeratorUser(RoleRequired):
    role_check = staticmethod(rbac.is_moderator)


class IsAdminUser(RoleRequired):
    role_check = staticmethod(rbac.is_admin)
