"""Admin user management service."""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from ..models import AdminPermission, PermissionKey
from .exceptions import AdminNotFoundError, DuplicateEmailError, InvalidPermissionError

User = get_user_model()
logger = logging.getLogger(__name__)

UPDATABLE_ADMIN_FIELDS = ('full_name', 'email', 'phone', 'is_super_admin', 'status')


def _admin_queryset() -> QuerySet:
    return (
        User.objects
        .filter(role=User.Role.ADMIN)
        .prefetch_related('admin_permissions')
    )


def _clean_permission_keys(keys: Iterable[str]) -> list:
    valid = set(PermissionKey.values)
    cleaned = []
    for key in keys:
        if key not in valid:
            raise InvalidPermissionError(f"Unknown permission: {key}")
        if key not in cleaned:
            cleaned.append(key)
    return cleaned


def fetch_admins() -> QuerySet:
    """Return all admin users, newest first, with permissions prefetched."""
    return _admin_queryset().order_by('-created_at')


def fetch_admin_by_id(*, admin_id: UUID) -> User:
    """
    Return a single admin.

    Raises:
        AdminNotFoundError: If no admin has this id
    """
    try:
        return _admin_queryset().get(id=admin_id)
    except User.DoesNotExist:
        raise AdminNotFoundError(f"Admin not found: {admin_id}")


@transaction.atomic
def create_admin(
    *,
    full_name: str,
    email: str,
    password: str,
    phone: str = '',
    is_super_admin: bool = False,
    permissions: Optional[Iterable[str]] = None,
    created_by: Optional[User] = None,
) -> User:
    """
    Create an admin account.

    Permission rows are only stored for regular admins; a super admin
    implicitly holds every permission.

    Args:
        full_name: Display name
        email: Login email, must be unused
        password: Initial password
        phone: Contact number
        is_super_admin: Grant every permission
        permissions: Permission keys for a regular admin
        created_by: Acting admin, for the audit log

    Returns:
        Created admin user

    Raises:
        DuplicateEmailError: If the email is already registered
        InvalidPermissionError: If a permission key is unknown
    """
    keys = _clean_permission_keys(permissions or [])

    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError(f"A user with email {email} already exists")

    admin = User.objects.create_user(
        email=email,
        password=password,
        full_name=full_name,
        phone=phone or '',
        role=User.Role.ADMIN,
        status=User.Status.ACTIVE,
        is_super_admin=is_super_admin,
        is_staff=True,
    )

    if not is_super_admin and keys:
        AdminPermission.objects.bulk_create([
            AdminPermission(admin=admin, permission_key=key) for key in keys
        ])

    logger.info(
        "Admin %s created by %s (super_admin=%s, permissions=%d)",
        admin.id,
        getattr(created_by, 'id', None),
        is_super_admin,
        len(keys),
    )
    return fetch_admin_by_id(admin_id=admin.id)


@transaction.atomic
def update_admin(*, admin_id: UUID, **fields) -> User:
    """
    Update profile fields of an admin.

    Only full_name, email, phone, is_super_admin and status are accepted;
    other keys are ignored.

    Raises:
        AdminNotFoundError: If no admin has this id
        DuplicateEmailError: If the new email belongs to someone else
    """
    try:
        admin = (
            User.objects
            .select_for_update()
            .get(id=admin_id, role=User.Role.ADMIN)
        )
    except User.DoesNotExist:
        raise AdminNotFoundError(f"Admin not found: {admin_id}")

    updates = {k: v for k, v in fields.items() if k in UPDATABLE_ADMIN_FIELDS}

    new_email = updates.get('email')
    if new_email and User.objects.filter(email__iexact=new_email).exclude(id=admin.id).exists():
        raise DuplicateEmailError(f"A user with email {new_email} already exists")

    for field, value in updates.items():
        setattr(admin, field, value)

    if updates:
        admin.save(update_fields=[*updates.keys(), 'updated_at'])

    return fetch_admin_by_id(admin_id=admin.id)


def activate_admin(*, admin_id: UUID) -> User:
    """Set an admin's status to active."""
    return update_admin(admin_id=admin_id, status=User.Status.ACTIVE)


def deactivate_admin(*, admin_id: UUID) -> User:
    """Set an admin's status to inactive."""
    return update_admin(admin_id=admin_id, status=User.Status.INACTIVE)
