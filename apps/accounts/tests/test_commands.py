import pytest
from django.core.management import call_command

from apps.accounts.models import User
from apps.finance.models import DepositFeeConfiguration
from apps.retailers.models import Retailer, Terminal
from apps.vouchers.models import VoucherInventory, VoucherType


@pytest.mark.django_db
class TestCreateSampleData:

    def test_creates_back_office(self):
        call_command('create_sample_data', vouchers=2)

        assert User.objects.get(email='super@airvoucher.local').is_super_admin
        assert VoucherType.objects.count() == 17
        assert DepositFeeConfiguration.objects.count() == 4
        retailer = Retailer.objects.get(user__email='shop@airvoucher.local')
        assert retailer.agent.email == 'agent@airvoucher.local'
        assert retailer.commission_group.name == 'Standard'
        assert Terminal.objects.get(retailer=retailer).user.email == 'till@airvoucher.local'
        # Ringa, Easyload and CellC Airtime at three amounts
        assert VoucherInventory.objects.count() == 3 * 3 * 2

    def test_is_repeatable(self):
        call_command('create_sample_data', vouchers=1)
        call_command('create_sample_data', '--clear', vouchers=1)

        assert Retailer.objects.count() == 1
        assert VoucherType.objects.count() == 17
        assert VoucherInventory.objects.count() == 9
