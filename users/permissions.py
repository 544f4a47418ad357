from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """
    Allows access only to users with the admin role or superuser status.
    """
    message = "Access denied. Admins only."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin())


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Any authenticated user may read; only admins may write.
    """
    message = "Access denied. Admins only."

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.is_admin()


class IsSelfOrAdmin(permissions.BasePermission):
    """
    Allow users to edit only their own record, unless the user is an admin.
    """
    message = "Access denied."

    def has_object_permission(self, request, view, obj):
        return bool(
            request.user
            and request.user.is_authenticated
            and (request.user.is_admin() or obj.pk == request.user.pk)
        )
