from typing import Iterable

from rest_framework.permissions import BasePermission

from authentication.domain.identity import Role
from utils.rbac import has_role


class RoleRequired(BasePermission):
    """
    Grants access when the caller's persisted role is one of ``required_roles``.

    The role comes from the user row, not from the token claim, so a role
    change made by an admin applies to the next request.
    """

    required_roles: Iterable[Role] = ()
    message = "You do not have the required role."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        if not self.required_roles:
            return True
        return has_role(user, *self.required_roles)

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class SellerRequired(RoleRequired):
    required_roles = (Role.SELLER, Role.ADMIN)
    message = "Seller or admin role required."


class AdminRequired(RoleRequired):
    required_roles = (Role.ADMIN,)
    message = "Admin role required."
