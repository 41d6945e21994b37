import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import PermissionKey, User


@pytest.mark.django_db
class TestRetailerAPI:
    """Tests for /api/retailers/"""

    def test_list(self, admin_client, retailer):
        response = admin_client.get(reverse('retailers:retailer-list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['short_code'] == 'ABC234'
        assert response.data[0]['agent_name'] == 'Andile Agent'
        assert response.data[0]['commission_group_name'] == 'Gold'
        assert response.data[0]['available_credit'] == '600.00'

    def test_list_requires_admin(self, retailer_client):
        response = retailer_client.get(reverse('retailers:retailer-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_filter_by_status(self, admin_client, retailer):
        response = admin_client.get(reverse('retailers:retailer-list'), {'status': 'suspended'})

        assert response.data == []

    def test_create_requires_permission(self, admin_client):
        response = admin_client.post(reverse('retailers:retailer-list'), {
            'full_name': 'Nomsa New',
            'email': 'new@example.com',
            'password': 'NewShop123',
            'name': 'New Shop',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create(self, admin_client, admin_user, grant, commission_group):
        grant(admin_user, PermissionKey.MANAGE_RETAILERS)

        response = admin_client.post(reverse('retailers:retailer-list'), {
            'full_name': 'Nomsa New',
            'email': 'new@example.com',
            'password': 'NewShop123',
            'name': 'New Shop',
            'initial_balance': '250.00',
            'commission_group_id': str(commission_group.id),
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['email'] == 'new@example.com'
        assert response.data['balance'] == '250.00'
        assert response.data['commission_group_name'] == 'Gold'
        assert len(response.data['short_code']) == 6

    def test_create_duplicate_email(self, super_admin_client, retailer):
        response = super_admin_client.post(reverse('retailers:retailer-list'), {
            'full_name': 'Sipho Again',
            'email': 'shop@example.com',
            'password': 'ShopPass123',
            'name': 'Second Spaza',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_suspend(self, super_admin_client, retailer, retailer_user):
        url = reverse('retailers:retailer-detail', args=[retailer.id])
        response = super_admin_client.patch(url, {'status': 'suspended'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'suspended'
        retailer_user.refresh_from_db()
        assert retailer_user.status == User.Status.INACTIVE

    def test_balance_requires_credit_permission(self, admin_client, admin_user, grant, retailer):
        grant(admin_user, PermissionKey.MANAGE_RETAILERS)
        url = reverse('retailers:retailer-balance', args=[retailer.id])

        response = admin_client.patch(url, {'balance': '10.00'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_balance(self, super_admin_client, retailer):
        url = reverse('retailers:retailer-balance', args=[retailer.id])
        response = super_admin_client.patch(url, {'balance': '10.00'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == '10.00'

    def test_reset_password(self, admin_client, admin_user, grant, retailer, retailer_user):
        grant(admin_user, PermissionKey.RESET_PASSWORDS)
        url = reverse('retailers:retailer-reset-password', args=[retailer.id])

        response = admin_client.post(url, {})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['short_code'] == 'ABC234'
        retailer_user.refresh_from_db()
        assert retailer_user.check_password(response.data['password'])

    def test_me(self, retailer_client):
        response = retailer_client.get(reverse('retailers:retailer-me'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Corner Spaza'
        assert response.data['email'] == 'shop@example.com'

    def test_me_requires_retailer_role(self, admin_client):
        response = admin_client.get(reverse('retailers:retailer-me'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestRetailerTerminalsAPI:
    """Tests for /api/retailers/{id}/terminals/"""

    def test_list(self, admin_client, retailer, terminal):
        url = reverse('retailers:retailer-terminals', args=[retailer.id])
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [t['short_code'] for t in response.data] == ['ABC234-01']
        assert response.data[0]['email'] == 'till1@example.com'

    def test_add_with_login(self, admin_client, admin_user, grant, retailer, terminal):
        grant(admin_user, PermissionKey.MANAGE_TERMINALS)
        url = reverse('retailers:retailer-terminals', args=[retailer.id])

        response = admin_client.post(url, {
            'name': 'Till 2',
            'contact_person': 'Thabo Till',
            'email': 'till2@example.com',
            'password': 'TillTwo123',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['short_code'] == 'ABC234-02'
        assert response.data['email'] == 'till2@example.com'

    def test_add_without_login(self, super_admin_client, retailer):
        url = reverse('retailers:retailer-terminals', args=[retailer.id])
        response = super_admin_client.post(url, {'name': 'Shared till'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['email'] is None

    def test_email_needs_password(self, super_admin_client, retailer):
        url = reverse('retailers:retailer-terminals', args=[retailer.id])
        response = super_admin_client.post(url, {'name': 'Till 2', 'email': 'till2@example.com'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_requires_permission(self, admin_client, retailer):
        url = reverse('retailers:retailer-terminals', args=[retailer.id])
        response = admin_client.post(url, {'name': 'Till 2'})

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestAgentAPI:
    """Tests for /api/agents/"""

    def test_list(self, admin_client, retailer):
        response = admin_client.get(reverse('retailers:agent-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['email'] == 'agent@example.com'
        assert response.data[0]['retailer_count'] == 1
        assert response.data[0]['mtd_sales'] == '0.00'

    def test_create(self, admin_client, admin_user, grant):
        grant(admin_user, PermissionKey.MANAGE_AGENTS)

        response = admin_client.post(reverse('retailers:agent-list'), {
            'full_name': 'Zanele Agent',
            'email': 'zanele@example.com',
            'password': 'Zanele12345',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email='zanele@example.com').role == User.Role.AGENT

    def test_unassign_then_assign(self, super_admin_client, retailer, agent_user):
        unassign = reverse('retailers:agent-unassign', args=[agent_user.id])
        response = super_admin_client.post(unassign, {'retailer_id': str(retailer.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['agent_profile_id'] is None

        unassigned = super_admin_client.get(reverse('retailers:agent-unassigned'))
        assert [r['id'] for r in unassigned.data] == [str(retailer.id)]

        assign = reverse('retailers:agent-assign', args=[agent_user.id])
        response = super_admin_client.post(assign, {'retailer_id': str(retailer.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['agent_name'] == 'Andile Agent'

    def test_me(self, client_for, agent_user, retailer):
        response = client_for(agent_user).get(reverse('retailers:agent-me'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['agent']['email'] == 'agent@example.com'
        assert [r['name'] for r in response.data['retailers']] == ['Corner Spaza']


@pytest.mark.django_db
class TestTerminalAPI:
    """Tests for /api/terminals/"""

    def test_me(self, terminal_client):
        response = terminal_client.get(reverse('retailers:terminal-me'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['short_code'] == 'ABC234-01'
        assert response.data['retailer_name'] == 'Corner Spaza'

    def test_deactivate(self, super_admin_client, terminal, terminal_user):
        url = reverse('retailers:terminal-detail', args=[terminal.id])
        response = super_admin_client.patch(url, {'status': 'inactive'})

        assert response.status_code == status.HTTP_200_OK
        terminal_user.refresh_from_db()
        assert terminal_user.status == User.Status.INACTIVE

    def test_reset_password(self, super_admin_client, terminal):
        url = reverse('retailers:terminal-reset-password', args=[terminal.id])
        response = super_admin_client.post(url, {'password': 'NewTill1234'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'password': 'NewTill1234', 'short_code': 'ABC234-01'}
