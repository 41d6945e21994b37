import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import AdminPermission, PermissionKey, User


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, admin_user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'admin@example.com', 'password': 'AdminPass123'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == 'admin'

    def test_login_is_case_insensitive_on_email(self, api_client, admin_user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'ADMIN@example.com', 'password': 'AdminPass123'})

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, admin_user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'admin@example.com', 'password': 'WrongPass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid email or password'

    def test_login_unknown_email(self, api_client, db):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'nobody@example.com', 'password': 'Whatever123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_account(self, api_client, admin_user):
        admin_user.status = User.Status.INACTIVE
        admin_user.save()

        url = reverse('users:login')
        response = api_client.post(url, {'email': 'admin@example.com', 'password': 'AdminPass123'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, admin_user):
        assert admin_user.last_login is None

        api_client.post(reverse('users:login'), {'email': 'admin@example.com', 'password': 'AdminPass123'})

        admin_user.refresh_from_db()
        assert admin_user.last_login is not None

    def test_login_with_terminal_short_code(self, api_client, terminal):
        response = api_client.post(reverse('users:login'), {'short_code': 'abc234-01', 'password': 'TillPass123'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['role'] == 'terminal'

    def test_login_needs_email_or_short_code(self, api_client, db):
        response = api_client.post(reverse('users:login'), {'password': 'Whatever123'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/me/ and /api/auth/me/permissions/"""

    def test_me_requires_auth(self, api_client):
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_profile(self, admin_client, admin_user):
        response = admin_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == admin_user.email
        assert response.data['full_name'] == 'Plain Admin'

    def test_super_admin_has_every_permission(self, super_admin_client):
        response = super_admin_client.get(reverse('users:my-permissions'))

        assert response.data['is_super_admin'] is True
        assert set(response.data['permissions']) == set(PermissionKey.values)

    def test_admin_sees_granted_permissions(self, admin_client, admin_user, grant):
        grant(admin_user, PermissionKey.VIEW_REPORTS)

        response = admin_client.get(reverse('users:my-permissions'))

        assert response.data == {'permissions': ['view_reports'], 'is_super_admin': False}

    def test_permission_catalog_lists_every_key(self, admin_client):
        response = admin_client.get(reverse('users:permission-catalog'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == len(PermissionKey.values)
        dashboard = next(p for p in response.data if p['key'] == 'view_dashboard')
        assert dashboard['category'] == 'Dashboard'


# =============================================================================
# Password Reset Tests
# =============================================================================

@pytest.mark.django_db(transaction=True)
class TestPasswordReset:
    """Tests for /api/auth/forgot-password/ and /api/auth/reset-password/"""

    def test_request_sends_email(self, api_client, admin_user):
        response = api_client.post(reverse('users:forgot-password'), {'email': admin_user.email})

        assert response.status_code == status.HTTP_200_OK
        admin_user.refresh_from_db()
        assert admin_user.reset_token
        assert len(mail.outbox) == 1
        assert admin_user.reset_token in mail.outbox[0].body

    def test_request_unknown_email_same_message(self, api_client, admin_user):
        known = api_client.post(reverse('users:forgot-password'), {'email': admin_user.email})
        unknown = api_client.post(reverse('users:forgot-password'), {'email': 'ghost@example.com'})

        assert unknown.status_code == status.HTTP_200_OK
        assert unknown.data['message'] == known.data['message']

    def test_confirm_sets_new_password(self, api_client, admin_user):
        admin_user.reset_token = 'valid-reset-token'
        admin_user.save()

        response = api_client.post(reverse('users:reset-password'), {
            'token': 'valid-reset-token',
            'new_password': 'BrandNew123',
        })

        assert response.status_code == status.HTTP_200_OK
        admin_user.refresh_from_db()
        assert admin_user.check_password('BrandNew123')
        assert admin_user.reset_token is None

    def test_confirm_invalid_token(self, api_client, admin_user):
        response = api_client.post(reverse('users:reset-password'), {
            'token': 'nope',
            'new_password': 'BrandNew123',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid or expired reset token'

    def test_confirm_weak_password(self, api_client, admin_user):
        admin_user.reset_token = 'valid-reset-token'
        admin_user.save()

        response = api_client.post(reverse('users:reset-password'), {
            'token': 'valid-reset-token',
            'new_password': 'alllowercase',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        admin_user.refresh_from_db()
        assert admin_user.reset_token == 'valid-reset-token'


# =============================================================================
# Admin Management Tests
# =============================================================================

@pytest.mark.django_db
class TestAdminManagement:
    """Tests for /api/admins/"""

    def test_list_requires_manage_admins(self, admin_client):
        response = admin_client.get(reverse('admins:admin-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_with_permission(self, admin_client, admin_user, grant, super_admin):
        grant(admin_user, PermissionKey.MANAGE_ADMINS)

        response = admin_client.get(reverse('admins:admin-list'))

        assert response.status_code == status.HTTP_200_OK
        emails = {a['email'] for a in response.data}
        assert emails == {'admin@example.com', 'super@example.com'}

    def test_create_admin_with_permissions(self, super_admin_client):
        response = super_admin_client.post(reverse('admins:admin-list'), {
            'full_name': 'New Admin',
            'email': 'new.admin@example.com',
            'password': 'NewAdmin123',
            'permissions': ['view_reports', 'manage_vouchers'],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['permissions'] == ['manage_vouchers', 'view_reports']
        user = User.objects.get(email='new.admin@example.com')
        assert user.role == User.Role.ADMIN

    def test_create_duplicate_email(self, super_admin_client, admin_user):
        response = super_admin_client.post(reverse('admins:admin-list'), {
            'full_name': 'Copy',
            'email': admin_user.email,
            'password': 'NewAdmin123',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_only_super_admin_creates_super_admin(self, admin_client, admin_user, grant):
        grant(admin_user, PermissionKey.MANAGE_ADMINS)

        response = admin_client.post(reverse('admins:admin-list'), {
            'full_name': 'Sneaky',
            'email': 'sneaky@example.com',
            'password': 'Sneaky12345',
            'is_super_admin': True,
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_cannot_deactivate_self(self, super_admin_client, super_admin):
        url = reverse('admins:admin-deactivate', args=[super_admin.id])
        response = super_admin_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_deactivate_and_activate(self, super_admin_client, admin_user):
        response = super_admin_client.post(reverse('admins:admin-deactivate', args=[admin_user.id]))
        assert response.data['status'] == 'inactive'

        response = super_admin_client.post(reverse('admins:admin-activate', args=[admin_user.id]))
        assert response.data['status'] == 'active'

    def test_toggle_permission(self, super_admin_client, admin_user):
        url = reverse('admins:admin-toggle-permission', args=[admin_user.id])

        response = super_admin_client.post(url, {'permission_key': 'view_reports', 'enabled': True})
        assert response.data['permissions'] == ['view_reports']

        response = super_admin_client.post(url, {'permission_key': 'view_reports', 'enabled': False})
        assert response.data['permissions'] == []

    def test_permission_changes_need_super_admin(self, admin_client, admin_user, grant):
        grant(admin_user, PermissionKey.MANAGE_ADMINS)

        url = reverse('admins:admin-add-permission', args=[admin_user.id])
        response = admin_client.post(url, {'permission_key': 'manage_settings'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not AdminPermission.objects.filter(permission_key='manage_settings').exists()

    def test_set_permissions_replaces(self, super_admin_client, admin_user, grant):
        grant(admin_user, PermissionKey.MANAGE_DEPOSITS)

        url = reverse('admins:admin-set-permissions', args=[admin_user.id])
        response = super_admin_client.put(url, {'permissions': ['view_reports', 'view_dashboard']}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['permissions'] == ['view_dashboard', 'view_reports']

    def test_retrieve_unknown_admin(self, super_admin_client):
        url = reverse('admins:admin-detail', args=['00000000-0000-0000-0000-000000000000'])
        response = super_admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Health Check Tests
# =============================================================================

@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/"""

    def test_plain_http_is_served_without_redirect(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'database': 'ok'}
