"""
Admin permission service.

Super admins implicitly hold every permission. Only super admins may
grant or revoke permissions of other admins.
"""

import logging
from typing import Iterable, List
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction

from ..models import AdminPermission, PermissionKey
from .admin_management import fetch_admin_by_id
from .exceptions import InsufficientPermissionsError, InvalidPermissionError

User = get_user_model()
logger = logging.getLogger(__name__)


def _is_active_admin(user) -> bool:
    return bool(
        user
        and user.is_authenticated
        and user.role == User.Role.ADMIN
        and user.status == User.Status.ACTIVE
    )


def is_super_admin(user) -> bool:
    """Return True for an active admin flagged as super admin."""
    return _is_active_admin(user) and user.is_super_admin


def has_permission(user, permission_key: str) -> bool:
    """Return True if the active admin holds the permission (super admins always do)."""
    if not _is_active_admin(user):
        return False
    if user.is_super_admin:
        return True
    return AdminPermission.objects.filter(
        admin=user, permission_key=permission_key
    ).exists()


def fetch_admin_permissions(*, admin_id: UUID) -> List[str]:
    """Return the stored permission keys of an admin."""
    return list(
        AdminPermission.objects
        .filter(admin_id=admin_id)
        .order_by('permission_key')
        .values_list('permission_key', flat=True)
    )


def fetch_my_permissions(user) -> dict:
    """
    Return the effective permissions of the calling user.

    Returns:
        {'permissions': [...], 'is_super_admin': bool}
    """
    if is_super_admin(user):
        return {'permissions': list(PermissionKey.values), 'is_super_admin': True}

    if not _is_active_admin(user):
        return {'permissions': [], 'is_super_admin': False}

    return {
        'permissions': fetch_admin_permissions(admin_id=user.id),
        'is_super_admin': False,
    }


def _require_super_admin(acting_user) -> None:
    if not is_super_admin(acting_user):
        raise InsufficientPermissionsError("Only super admins can manage permissions")


def _require_valid_key(permission_key: str) -> None:
    if permission_key not in PermissionKey.values:
        raise InvalidPermissionError(f"Unknown permission: {permission_key}")


@transaction.atomic
def add_permission(*, admin_id: UUID, permission_key: str, acting_user) -> None:
    """
    Grant a permission to an admin. Granting twice is a no-op.

    Raises:
        InsufficientPermissionsError: If acting_user is not a super admin
        InvalidPermissionError: If the key is unknown
        AdminNotFoundError: If the admin does not exist
    """
    _require_super_admin(acting_user)
    _require_valid_key(permission_key)
    admin = fetch_admin_by_id(admin_id=admin_id)

    AdminPermission.objects.get_or_create(admin=admin, permission_key=permission_key)
    logger.info("Permission %s granted to admin %s by %s", permission_key, admin.id, acting_user.id)


@transaction.atomic
def remove_permission(*, admin_id: UUID, permission_key: str, acting_user) -> None:
    """
    Revoke a permission from an admin.

    Raises:
        InsufficientPermissionsError: If acting_user is not a super admin
        InvalidPermissionError: If the key is unknown
    """
    _require_super_admin(acting_user)
    _require_valid_key(permission_key)

    AdminPermission.objects.filter(
        admin_id=admin_id, permission_key=permission_key
    ).delete()
    logger.info("Permission %s revoked from admin %s by %s", permission_key, admin_id, acting_user.id)


@transaction.atomic
def set_admin_permissions(*, admin_id: UUID, permission_keys: Iterable[str], acting_user) -> List[str]:
    """
    Replace all permissions of an admin with the given keys.

    Returns:
        The admin's permission keys after the change

    Raises:
        InsufficientPermissionsError: If acting_user is not a super admin
        InvalidPermissionError: If any key is unknown
        AdminNotFoundError: If the admin does not exist
    """
    _require_super_admin(acting_user)
    keys = []
    for key in permission_keys:
        _require_valid_key(key)
        if key not in keys:
            keys.append(key)

    admin = fetch_admin_by_id(admin_id=admin_id)

    AdminPermission.objects.filter(admin=admin).delete()
    AdminPermission.objects.bulk_create([
        AdminPermission(admin=admin, permission_key=key) for key in keys
    ])
    logger.info("Permissions of admin %s replaced by %s (%d keys)", admin.id, acting_user.id, len(keys))

    return fetch_admin_permissions(admin_id=admin.id)


def toggle_permission(*, admin_id: UUID, permission_key: str, enabled: bool, acting_user) -> None:
    """Grant the permission when enabled is True, revoke it otherwise."""
    if enabled:
        add_permission(admin_id=admin_id, permission_key=permission_key, acting_user=acting_user)
    else:
        remove_permission(admin_id=admin_id, permission_key=permission_key, acting_user=acting_user)
