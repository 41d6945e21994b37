import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import PermissionKey
from apps.finance.models import RetailerDeposit


@pytest.mark.django_db
class TestDepositFeeAPI:
    """Tests for /api/finance/deposit-fees/"""

    def test_list(self, admin_client, deposit_fees):
        response = admin_client.get(reverse('finance:deposit-fee-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [c['deposit_method'] for c in response.data] == ['ATM', 'Branch', 'Counter', 'EFT']

    def test_update_requires_manage_settings(self, admin_client, deposit_fees):
        url = reverse('finance:deposit-fee-detail', args=['ATM'])
        response = admin_client.patch(url, {'fee_type': 'fixed', 'fee_value': '12.00'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update(self, super_admin_client, deposit_fees):
        url = reverse('finance:deposit-fee-detail', args=['ATM'])
        response = super_admin_client.patch(url, {'fee_type': 'fixed', 'fee_value': '12.00'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fee_value'] == '12.00'

    def test_percentage_over_100_rejected(self, super_admin_client, deposit_fees):
        url = reverse('finance:deposit-fee-detail', args=['Counter'])
        response = super_admin_client.patch(url, {'fee_type': 'percentage', 'fee_value': '150'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestDepositAPI:
    """Tests for /api/finance/deposits/"""

    def test_create(self, admin_client, admin_user, grant, retailer, deposit_fees):
        grant(admin_user, PermissionKey.MANAGE_DEPOSITS)

        response = admin_client.post(reverse('finance:deposit-list'), {
            'retailer_id': str(retailer.id),
            'amount_deposited': '1000.00',
            'deposit_method': 'Counter',
            'notes': 'Branch slip 123',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['fee_amount'] == '15.00'
        assert response.data['net_amount'] == '985.00'
        assert response.data['processed_by_email'] == 'admin@example.com'

    def test_create_without_permission(self, admin_client, retailer, deposit_fees):
        response = admin_client.post(reverse('finance:deposit-list'), {
            'retailer_id': str(retailer.id),
            'amount_deposited': '1000.00',
            'deposit_method': 'EFT',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not RetailerDeposit.objects.exists()

    def test_removal_past_limit(self, super_admin_client, retailer, deposit_fees):
        response = super_admin_client.post(reverse('finance:deposit-list'), {
            'retailer_id': str(retailer.id),
            'amount_deposited': '700.00',
            'deposit_method': 'EFT',
            'adjustment_type': 'removal',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'].startswith('Cannot remove R 700.00')

    def test_history_requires_retailer(self, super_admin_client):
        response = super_admin_client.get(reverse('finance:deposit-list'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_history(self, super_admin_client, retailer, deposit_fees):
        super_admin_client.post(reverse('finance:deposit-list'), {
            'retailer_id': str(retailer.id),
            'amount_deposited': '100.00',
            'deposit_method': 'EFT',
        })

        response = super_admin_client.get(reverse('finance:deposit-list'), {'retailer': str(retailer.id)})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['processed_by_name'] == 'Super Admin'

    def test_preview(self, admin_client, deposit_fees):
        response = admin_client.post(reverse('finance:deposit-preview'), {
            'amount': '200.00',
            'deposit_method': 'Branch',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fee_amount'] == '25.00'
        assert response.data['net_amount'] == '175.00'


@pytest.mark.django_db
class TestCreditAPI:
    """Tests for /api/finance/credit/"""

    def test_increase(self, admin_client, admin_user, grant, retailer):
        grant(admin_user, PermissionKey.MANAGE_CREDIT_LIMITS)

        response = admin_client.post(reverse('finance:credit-list'), {
            'retailer_id': str(retailer.id),
            'adjustment_type': 'increase',
            'amount': '400.00',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['credit_limit_after'] == '500.00'

    def test_decrease_below_zero(self, super_admin_client, retailer):
        response = super_admin_client.post(reverse('finance:credit-list'), {
            'retailer_id': str(retailer.id),
            'adjustment_type': 'decrease',
            'amount': '150.00',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Credit limit cannot be negative'

    def test_unknown_retailer(self, super_admin_client):
        response = super_admin_client.post(reverse('finance:credit-list'), {
            'retailer_id': '00000000-0000-0000-0000-000000000000',
            'adjustment_type': 'increase',
            'amount': '1.00',
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND
