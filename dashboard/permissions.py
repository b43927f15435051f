from rest_framework.permissions import BasePermission


class IsStudioAdmin(BasePermission):
    """Allow access only to sessions carrying the admin role."""

    message = 'Admin access required'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return getattr(request.user, 'is_admin', False)
