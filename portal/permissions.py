from rest_framework.permissions import BasePermission


class IsPortalClient(BasePermission):
    """Allow access only to sessions carrying the client role."""

    message = 'Client access required'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return getattr(request.user, 'is_client', False)


class IsProjectOwner(BasePermission):
    """The project (or the payment's project) must belong to the session's client."""

    message = 'This project belongs to another client'

    def has_object_permission(self, request, view, obj):
        client = getattr(request.user, 'client', None)
        if client is None:
            return False
        project = getattr(obj, 'project', obj)
        return project.client_id == client.id
