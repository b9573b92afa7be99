"""
Ownership rules:
- super_admin → may modify any record
- admin → only records it created
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

SUPER_ADMIN = 'super_admin'


def can_mutate(admin, resource):
    """True when ``admin`` created ``resource`` or is a super admin"""
    if admin is None or not getattr(admin, 'is_authenticated', False):
        return False
    if getattr(admin, 'role', None) == SUPER_ADMIN:
        return True
    return resource.created_by_id == admin.pk


class IsCreatorOrSuperAdmin(BasePermission):
    message = 'Access denied'

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return can_mutate(request.user, obj)
