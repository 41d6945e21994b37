from rest_framework import permissions

from .models import User
from .services.permission_management import has_permission as admin_has_permission


class IsAdminRole(permissions.BasePermission):
    """
    Permission: User must be an active admin.
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.role == User.Role.ADMIN
            and user.status == User.Status.ACTIVE
        )


class IsSuperAdmin(IsAdminRole):
    """
    Permission: User must be an active super admin.
    """
    message = 'Super admin access required'

    def has_permission(self, request, view):
        return super().has_permission(request, view) and request.user.is_super_admin


def HasAdminPermission(permission_key):
    """
    Build a permission class requiring one admin permission key.

    Super admins always pass. Usage:
        permission_classes = [HasAdminPermission(PermissionKey.MANAGE_RETAILERS)]
    """

    class _HasAdminPermission(IsAdminRole):
        message = f'Missing permission: {permission_key}'

        def has_permission(self, request, view):
            return (
                super().has_permission(request, view)
                and admin_has_permission(request.user, permission_key)
            )

    _HasAdminPermission.__name__ = f'HasAdminPermission_{permission_key}'
    return _HasAdminPermission


class _RolePermission(permissions.BasePermission):
    role = None

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.role == self.role
            and user.status == User.Status.ACTIVE
        )


class IsRetailerRole(_RolePermission):
    """Permission: User must be an active retailer."""
    role = User.Role.RETAILER


class IsAgentRole(_RolePermission):
    """Permission: User must be an active agent."""
    role = User.Role.AGENT


class IsTerminalRole(_RolePermission):
    """Permission: User must be an active terminal."""
    role = User.Role.TERMINAL
