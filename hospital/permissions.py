"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


def _role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    return getattr(user, "role", None)


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) == "admin"


class ReadOnly(BasePermission):
    """Allow read-only access (GET, HEAD, OPTIONS)."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return request.method in SAFE_METHODS


def role_required(*roles):
    """Build a permission class admitting admins plus the given roles on writes.

    Safe methods stay open to every authenticated user.
    """
    allowed = {"admin", *roles}

    class _RolePermission(BasePermission):
        message = f"Requires one of the roles: {', '.join(sorted(allowed))}"

        def has_permission(self, request, view) -> bool:  # type: ignore[override]
            if request.method in SAFE_METHODS:
                return _role(request) is not None
            return _role(request) in allowed

    _RolePermission.__name__ = f"RoleRequired_{'_'.join(sorted(allowed))}"
    return _RolePermission


PharmacyStaff = role_required("pharmacist", "doctor")
CashierStaff = role_required("cashier")
WardStaff = role_required("doctor", "nurse")
AdminWrites = role_required()
