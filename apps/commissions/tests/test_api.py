import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import PermissionKey
from apps.commissions.models import CommissionGroup, VoucherCommissionOverride


@pytest.fixture
def manager_client(admin_user, admin_client, grant):
    grant(admin_user, PermissionKey.MANAGE_COMMISSION_GROUPS)
    return admin_client


@pytest.mark.django_db
class TestCommissionGroupAPI:
    """Tests for /api/commissions/groups/"""

    def test_list_with_counts(self, admin_client, retailer):
        response = admin_client.get(reverse('commissions:commission-group-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['retailer_count'] == 1
        assert response.data[0]['agent_count'] == 1

    def test_create_requires_permission(self, admin_client):
        response = admin_client.post(reverse('commissions:commission-group-list'), {'name': 'Silver'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_with_rates(self, manager_client, voucher_type):
        response = manager_client.post(reverse('commissions:commission-group-list'), {
            'name': 'Silver',
            'description': 'Mid tier',
            'rates': [
                {'voucher_type_id': str(voucher_type.id), 'retailer_pct': '3.00', 'agent_pct': '1.00'},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Silver'
        rate, = response.data['rates']
        assert rate['supplier_pct'] == '10.00'
        assert rate['voucher_type_name'] == 'Ringa'

    def test_destroy_archives(self, manager_client, commission_group):
        url = reverse('commissions:commission-group-detail', args=[commission_group.id])
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        commission_group.refresh_from_db()
        assert commission_group.is_active is False

    def test_active_lists_rates(self, admin_client, commission_group):
        CommissionGroup.objects.create(name='Archived', is_active=False)

        response = admin_client.get(reverse('commissions:commission-group-active'))

        assert [g['name'] for g in response.data] == ['Gold']
        assert len(response.data[0]['rates']) == 1

    def test_put_rate_split_check(self, manager_client, commission_group, voucher_type):
        url = reverse('commissions:commission-group-rates', args=[commission_group.id])
        response = manager_client.put(url, {
            'voucher_type_id': str(voucher_type.id),
            'retailer_pct': '9.00',
            'agent_pct': '2.00',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_put_rate(self, manager_client, commission_group, voucher_type):
        url = reverse('commissions:commission-group-rates', args=[commission_group.id])
        response = manager_client.put(url, {
            'voucher_type_id': str(voucher_type.id),
            'retailer_pct': '5.00',
            'agent_pct': '2.00',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['retailer_pct'] == '5.00'

    def test_retrieve_unknown(self, admin_client):
        url = reverse('commissions:commission-group-detail', args=['00000000-0000-0000-0000-000000000000'])
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCommissionOverrideAPI:
    """Tests for /api/commissions/overrides/"""

    def test_upsert_and_lookup(self, manager_client, voucher_type):
        response = manager_client.post(reverse('commissions:commission-override-list'), {
            'voucher_type': str(voucher_type.id),
            'amount': '50.00',
            'supplier_pct': '0.08',
            'retailer_pct': '0.03',
            'agent_pct': '0.01',
        }, format='json')
        assert response.status_code == status.HTTP_200_OK

        response = manager_client.get(
            reverse('commissions:commission-override-list'),
            {'voucher_type': str(voucher_type.id), 'amount': '50.00'},
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['commission_type'] == 'percentage'

    def test_percentage_out_of_range(self, manager_client, voucher_type):
        response = manager_client.post(reverse('commissions:commission-override-list'), {
            'voucher_type': str(voucher_type.id),
            'amount': '50.00',
            'supplier_pct': '8',
            'retailer_pct': '3',
            'agent_pct': '1',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not VoucherCommissionOverride.objects.exists()

    def test_lookup_missing(self, admin_client, voucher_type):
        response = admin_client.get(
            reverse('commissions:commission-override-list'),
            {'voucher_type': str(voucher_type.id), 'amount': '99.00'},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_remove(self, manager_client, voucher_type):
        VoucherCommissionOverride.objects.create(voucher_type=voucher_type, amount='10.00')

        url = reverse('commissions:commission-override-remove')
        response = manager_client.delete(f'{url}?voucher_type={voucher_type.id}&amount=10.00')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not VoucherCommissionOverride.objects.exists()


@pytest.mark.django_db
class TestCommissionPreviewAPI:

    def test_preview_group_rate(self, admin_client, voucher_type, commission_group):
        response = admin_client.get(reverse('commissions:preview'), {
            'voucher_type': str(voucher_type.id),
            'group': str(commission_group.id),
            'amount': '100.00',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'supplier': '10.00',
            'retailer': '4.00',
            'agent': '1.00',
            'profit': '5.00',
            'source': 'group_rate',
        }

    def test_preview_requires_amount(self, admin_client, voucher_type):
        response = admin_client.get(reverse('commissions:preview'), {'voucher_type': str(voucher_type.id)})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_voucher_amounts(self, admin_client, voucher_type, make_vouchers):
        make_vouchers(voucher_type, '20.00', count=2)

        response = admin_client.get(reverse('commissions:voucher-amounts', args=[voucher_type.id]))

        assert response.data['amounts'] == ['20.00']
