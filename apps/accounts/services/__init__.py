"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    WeakPasswordError,
    UserNotFoundError,
    AdminNotFoundError,
    DuplicateEmailError,
    InsufficientPermissionsError,
    InvalidPermissionError,
)
from .user_authentication import authenticate_user
from .password_reset import (
    RESET_REQUESTED_MESSAGE,
    request_password_reset,
    confirm_password_reset,
)
from .passwords import generate_password, validate_password_complexity
from .admin_management import (
    fetch_admins,
    fetch_admin_by_id,
    create_admin,
    update_admin,
    activate_admin,
    deactivate_admin,
)
from .permission_management import (
    is_super_admin,
    has_permission,
    fetch_admin_permissions,
    fetch_my_permissions,
    add_permission,
    remove_permission,
    set_admin_permissions,
    toggle_permission,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'WeakPasswordError',
    'UserNotFoundError',
    'AdminNotFoundError',
    'DuplicateEmailError',
    'InsufficientPermissionsError',
    'InvalidPermissionError',
    # Authentication
    'authenticate_user',
    'RESET_REQUESTED_MESSAGE',
    'request_password_reset',
    'confirm_password_reset',
    'generate_password',
    'validate_password_complexity',
    # Admins
    'fetch_admins',
    'fetch_admin_by_id',
    'create_admin',
    'update_admin',
    'activate_admin',
    'deactivate_admin',
    # Permissions
    'is_super_admin',
    'has_permission',
    'fetch_admin_permissions',
    'fetch_my_permissions',
    'add_permission',
    'remove_permission',
    'set_admin_permissions',
    'toggle_permission',
]
