# permissions/roles.py

"""
ROLES + ROLE PERMISSIONS

Three marketplace roles:
- customer: buys, owns a cart and their orders
- artisan:  sells, owns an artisan profile and its products
- admin:    global bypass for every ownership rule

Role checks live here. Ownership checks (who owns which resource) live in
permissions/policy.py.
"""

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission

# =========================================================
# ROLE CONSTANTS
# =========================================================
ROLE_CUSTOMER = "customer"
ROLE_ARTISAN = "artisan"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_CUSTOMER, "Customer"),
    (ROLE_ARTISAN, "Artisan"),
    (ROLE_ADMIN, "Admin"),
]


# =========================================================
# Helpers
# =========================================================
def is_active_principal(user) -> bool:
    """
    An acting principal must be authenticated AND active.
    Anything else is anonymous for access decisions.
    """
    if user is None:
        return False
    if not getattr(user, "is_authenticated", False):
        return False
    return bool(getattr(user, "is_active", False))


def get_user_role(user) -> Optional[str]:
    if not is_active_principal(user):
        return None
    return getattr(user, "role", None)


def has_role(user, role: str) -> bool:
    return get_user_role(user) == role


# =========================================================
# Base Role Permission
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Role gate for DRF views.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user_role = get_user_role(getattr(request, "user", None))
        if not user_role:
            return False
        return user_role in self.allowed_roles


class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsArtisan(BaseRolePermission):
    allowed_roles = {ROLE_ARTISAN}


class IsCustomer(BaseRolePermission):
    allowed_roles = {ROLE_CUSTOMER}
