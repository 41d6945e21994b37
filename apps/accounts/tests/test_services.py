"""
Service layer tests for the accounts app.

Tests cover:
- Generated passwords and complexity rules
- Admin creation and permission management
"""

import pytest

from apps.accounts.models import AdminPermission, PermissionKey, User
from apps.accounts.services import (
    authenticate_user,
    create_admin,
    update_admin,
    fetch_my_permissions,
    has_permission,
    is_super_admin,
    add_permission,
    set_admin_permissions,
    generate_password,
    validate_password_complexity,
)
from apps.accounts.services.exceptions import (
    DuplicateEmailError,
    InactiveAccountError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidPermissionError,
    WeakPasswordError,
)


# =============================================================================
# Password Helper Tests
# =============================================================================

class TestPasswords:

    def test_generated_password_meets_complexity(self):
        for _ in range(20):
            password = generate_password()
            validate_password_complexity(password)

    def test_generated_password_length(self, settings):
        settings.GENERATED_PASSWORD_LENGTH = 16
        assert len(generate_password()) == 16
        assert len(generate_password(10)) == 10

    def test_generated_password_has_minimum_length(self):
        assert len(generate_password(3)) == 8

    def test_generated_password_avoids_ambiguous_characters(self):
        for _ in range(20):
            assert not set(generate_password()) & set('0O1lI')

    @pytest.mark.parametrize('password', ['Short1', 'alllowercase1', 'ALLUPPERCASE1', 'NoDigitsHere'])
    def test_weak_passwords_rejected(self, password):
        with pytest.raises(WeakPasswordError):
            validate_password_complexity(password)


# =============================================================================
# Authentication Tests
# =============================================================================

@pytest.mark.django_db
class TestAuthentication:

    def test_inactive_status_blocks_login(self, admin_user):
        admin_user.status = User.Status.INACTIVE
        admin_user.save()

        with pytest.raises(InactiveAccountError):
            authenticate_user(email=admin_user.email, password='AdminPass123')

    def test_retailer_short_code(self, retailer, retailer_user):
        assert authenticate_user(short_code='ABC234', password='ShopPass123') == retailer_user

    def test_unknown_short_code(self, retailer):
        with pytest.raises(InvalidCredentialsError, match='Invalid short code or password'):
            authenticate_user(short_code='ZZZ999', password='ShopPass123')

    def test_wrong_password(self, admin_user):
        with pytest.raises(InvalidCredentialsError, match='Invalid email or password'):
            authenticate_user(email='admin@example.com', password='Wrong12345')


# =============================================================================
# Admin Management Tests
# =============================================================================

@pytest.mark.django_db
class TestAdminManagement:

    def test_super_admin_gets_no_permission_rows(self):
        admin = create_admin(
            full_name='Boss',
            email='boss@example.com',
            password='BossPass123',
            is_super_admin=True,
            permissions=['view_reports'],
        )

        assert admin.is_super_admin
        assert not AdminPermission.objects.filter(admin=admin).exists()

    def test_duplicate_permissions_stored_once(self):
        admin = create_admin(
            full_name='Clerk',
            email='clerk@example.com',
            password='ClerkPass123',
            permissions=['view_reports', 'view_reports'],
        )

        assert AdminPermission.objects.filter(admin=admin).count() == 1

    def test_unknown_permission_rejected(self):
        with pytest.raises(InvalidPermissionError):
            create_admin(
                full_name='Clerk',
                email='clerk@example.com',
                password='ClerkPass123',
                permissions=['fly_rockets'],
            )
        assert not User.objects.filter(email='clerk@example.com').exists()

    def test_update_email_to_taken_address(self, admin_user, super_admin):
        with pytest.raises(DuplicateEmailError):
            update_admin(admin_id=admin_user.id, email=super_admin.email)

    def test_update_ignores_unknown_fields(self, admin_user):
        admin = update_admin(admin_id=admin_user.id, full_name='Renamed', role='retailer')

        assert admin.full_name == 'Renamed'
        assert admin.role == User.Role.ADMIN


# =============================================================================
# Permission Tests
# =============================================================================

@pytest.mark.django_db
class TestPermissionManagement:

    def test_super_admin_has_any_permission(self, super_admin):
        assert has_permission(super_admin, PermissionKey.MANAGE_SETTINGS)

    def test_deactivated_admins_lose_permissions(self, super_admin, admin_user, grant):
        grant(admin_user, PermissionKey.VIEW_REPORTS)
        for user in (super_admin, admin_user):
            user.status = User.Status.INACTIVE
            user.save()

        assert not is_super_admin(super_admin)
        assert not has_permission(super_admin, PermissionKey.VIEW_REPORTS)
        assert not has_permission(admin_user, PermissionKey.VIEW_REPORTS)
        assert fetch_my_permissions(admin_user) == {'permissions': [], 'is_super_admin': False}
        with pytest.raises(InsufficientPermissionsError):
            add_permission(admin_id=admin_user.id, permission_key='view_dashboard', acting_user=super_admin)

    def test_non_admin_has_no_permission(self, retailer_user):
        assert not has_permission(retailer_user, PermissionKey.VIEW_REPORTS)
        assert fetch_my_permissions(retailer_user) == {'permissions': [], 'is_super_admin': False}

    def test_add_permission_twice_is_noop(self, super_admin, admin_user):
        add_permission(admin_id=admin_user.id, permission_key='view_reports', acting_user=super_admin)
        add_permission(admin_id=admin_user.id, permission_key='view_reports', acting_user=super_admin)

        assert AdminPermission.objects.filter(admin=admin_user).count() == 1
        assert has_permission(admin_user, PermissionKey.VIEW_REPORTS)

    def test_regular_admin_cannot_grant(self, admin_user):
        with pytest.raises(InsufficientPermissionsError):
            add_permission(admin_id=admin_user.id, permission_key='view_reports', acting_user=admin_user)

    def test_set_permissions_rejects_unknown_key_atomically(self, super_admin, admin_user, grant):
        grant(admin_user, PermissionKey.MANAGE_VOUCHERS)

        with pytest.raises(InvalidPermissionError):
            set_admin_permissions(
                admin_id=admin_user.id,
                permission_keys=['view_reports', 'bogus'],
                acting_user=super_admin,
            )

        assert list(
            AdminPermission.objects.filter(admin=admin_user).values_list('permission_key', flat=True)
        ) == ['manage_vouchers']
