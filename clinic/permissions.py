"""
Role based permission classes.

Reads are open to every signed-in user unless a view says otherwise;
writes are limited to the roles listed on each class.  DELETE is always
reserved for administrators.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

ADMIN_ROLES = {"admin"}
CLINICAL_ROLES = {"admin", "doctor"}
CARE_ROLES = {"admin", "doctor", "nurse"}


def _role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    if user.is_superuser:
        return "admin"
    return getattr(user, "role", None)


class IsAdminRole(BasePermission):
    """Allow access only to users with the administrator role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) in ADMIN_ROLES


class RoleWritePermission(BasePermission):
    """Authenticated reads; writes for ``write_roles``; deletes for admins."""
    write_roles: set[str] = ADMIN_ROLES

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        role = _role(request)
        if role is None:
            return False
        if request.method in SAFE_METHODS:
            return True
        if request.method == "DELETE":
            return role in ADMIN_ROLES
        return role in self.write_roles


class CareTeamWrite(RoleWritePermission):
    """Patients and appointments: admin, doctor or nurse may write."""
    write_roles = CARE_ROLES


class ClinicianWrite(RoleWritePermission):
    """Admissions and lab reports: admin or doctor may write."""
    write_roles = CLINICAL_ROLES


class AdminWrite(RoleWritePermission):
    """Doctors, medicines, staff and bills: only admins write."""
    write_roles = ADMIN_ROLES
