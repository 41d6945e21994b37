"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- A super admin and a reporting admin
- Every voucher type the file parser recognises
- Deposit fee configurations for EFT, ATM, Counter and Branch
- A commission group with rates for the airtime types
- An agent with one retailer and one terminal
- A little voucher stock per airtime type
"""

from decimal import Decimal
import random

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import AdminPermission, PermissionKey, User
from apps.commissions.models import CommissionGroup, CommissionGroupRate
from apps.finance.models import DepositFeeConfiguration, DepositMethod, FeeType
from apps.retailers.models import Retailer
from apps.retailers.services import create_agent, create_retailer, create_terminal_with_user
from apps.vouchers.models import (
    DataDuration,
    NetworkProvider,
    VoucherCategory,
    VoucherInventory,
    VoucherType,
)
from apps.vouchers.services import upload_vouchers

SAMPLE_PASSWORD = 'Password123'

# name, supplier %, category, duration, network
VOUCHER_TYPES = [
    ('Ringa', '8.00', VoucherCategory.AIRTIME, None, None),
    ('Hollywoodbets', '5.00', VoucherCategory.OTHER, None, None),
    ('Easyload', '6.50', VoucherCategory.AIRTIME, None, None),
    ('Unipin', '4.00', VoucherCategory.OTHER, None, None),
    ('CellC Airtime', '6.00', VoucherCategory.AIRTIME, None, NetworkProvider.CELLC),
    ('Vodacom Daily Data', '5.00', VoucherCategory.DATA, DataDuration.DAILY, NetworkProvider.VODACOM),
    ('Vodacom Weekly Data', '5.00', VoucherCategory.DATA, DataDuration.WEEKLY, NetworkProvider.VODACOM),
    ('Vodacom Monthly Data', '5.00', VoucherCategory.DATA, DataDuration.MONTHLY, NetworkProvider.VODACOM),
    ('Telkom Daily Data', '5.50', VoucherCategory.DATA, DataDuration.DAILY, NetworkProvider.TELKOM),
    ('Telkom Weekly Data', '5.50', VoucherCategory.DATA, DataDuration.WEEKLY, NetworkProvider.TELKOM),
    ('Telkom Monthly Data', '5.50', VoucherCategory.DATA, DataDuration.MONTHLY, NetworkProvider.TELKOM),
    ('MTN Daily Data', '4.50', VoucherCategory.DATA, DataDuration.DAILY, NetworkProvider.MTN),
    ('MTN Weekly Data', '4.50', VoucherCategory.DATA, DataDuration.WEEKLY, NetworkProvider.MTN),
    ('MTN Monthly Data', '4.50', VoucherCategory.DATA, DataDuration.MONTHLY, NetworkProvider.MTN),
    ('CellC Daily Data', '6.00', VoucherCategory.DATA, DataDuration.DAILY, NetworkProvider.CELLC),
    ('CellC Weekly Data', '6.00', VoucherCategory.DATA, DataDuration.WEEKLY, NetworkProvider.CELLC),
    ('CellC Monthly Data', '6.00', VoucherCategory.DATA, DataDuration.MONTHLY, NetworkProvider.CELLC),
]

DEPOSIT_FEES = [
    (DepositMethod.EFT, FeeType.FIXED, '0.00'),
    (DepositMethod.ATM, FeeType.FIXED, '10.00'),
    (DepositMethod.COUNTER, FeeType.PERCENTAGE, '1.50'),
    (DepositMethod.BRANCH, FeeType.FIXED, '25.00'),
]

STOCK_AMOUNTS = ['5.00', '10.00', '30.00']


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove unsold voucher stock before creating new sample data',
        )
        parser.add_argument(
            '--vouchers',
            type=int,
            default=20,
            help='Vouchers to create per airtime type and amount',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Removing unsold stock...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        admins = self.create_admins()
        voucher_types = self.create_voucher_types()
        self.create_deposit_fees()
        group = self.create_commission_group(voucher_types)
        self.create_retail_network(group)
        self.create_stock(voucher_types, admins['super'], options['vouchers'])

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write(f'  super@airvoucher.local / {SAMPLE_PASSWORD} (super admin)')
        self.stdout.write(f'  reports@airvoucher.local / {SAMPLE_PASSWORD} (admin, reports only)')
        self.stdout.write(f'  agent@airvoucher.local / {SAMPLE_PASSWORD} (agent)')
        self.stdout.write(f'  shop@airvoucher.local / {SAMPLE_PASSWORD} (retailer)')
        self.stdout.write(f'  till@airvoucher.local / {SAMPLE_PASSWORD} (terminal)')

    def clear_data(self):
        """Remove unsold stock; accounts and sold vouchers are kept."""
        VoucherInventory.objects.filter(sale__isnull=True).delete()

    def _ensure_user(self, email, **fields):
        user, created = User.objects.get_or_create(email=email, defaults=fields)
        if created:
            user.set_password(SAMPLE_PASSWORD)
            user.save()
        return user

    def create_admins(self):
        self.stdout.write('  Creating admins...')

        super_admin = self._ensure_user(
            'super@airvoucher.local',
            full_name='Super Admin',
            role=User.Role.ADMIN,
            is_super_admin=True,
            is_staff=True,
            is_superuser=True,
        )
        reports_admin = self._ensure_user(
            'reports@airvoucher.local',
            full_name='Reports Admin',
            role=User.Role.ADMIN,
        )
        for key in (PermissionKey.VIEW_DASHBOARD, PermissionKey.VIEW_REPORTS):
            AdminPermission.objects.get_or_create(admin=reports_admin, permission_key=key)

        return {'super': super_admin, 'reports': reports_admin}

    def create_voucher_types(self):
        self.stdout.write('  Creating voucher types...')

        voucher_types = {}
        for name, pct, category, duration, network in VOUCHER_TYPES:
            voucher_type, _ = VoucherType.objects.get_or_create(
                name=name,
                defaults={
                    'supplier_commission_pct': Decimal(pct),
                    'category': category,
                    'sub_category': duration,
                    'network_provider': network,
                },
            )
            voucher_types[name] = voucher_type
        return voucher_types

    def create_deposit_fees(self):
        self.stdout.write('  Creating deposit fees...')

        for method, fee_type, value in DEPOSIT_FEES:
            DepositFeeConfiguration.objects.get_or_create(
                deposit_method=method,
                defaults={'fee_type': fee_type, 'fee_value': Decimal(value)},
            )

    def create_commission_group(self, voucher_types):
        self.stdout.write('  Creating commission group...')

        group, _ = CommissionGroup.objects.get_or_create(
            name='Standard',
            defaults={'description': 'Default rates for new retailers'},
        )
        for voucher_type in voucher_types.values():
            if voucher_type.category != VoucherCategory.AIRTIME:
                continue
            CommissionGroupRate.objects.get_or_create(
                commission_group=group,
                voucher_type=voucher_type,
                defaults={
                    'retailer_pct': Decimal('3.00'),
                    'agent_pct': Decimal('1.00'),
                    'supplier_pct': voucher_type.supplier_commission_pct,
                },
            )
        return group

    def create_retail_network(self, group):
        self.stdout.write('  Creating agent, retailer and terminal...')

        agent = User.objects.filter(email='agent@airvoucher.local').first()
        if agent is None:
            agent = create_agent(
                profile_data={'full_name': 'Sample Agent', 'email': 'agent@airvoucher.local'},
                password=SAMPLE_PASSWORD,
            )

        if Retailer.objects.filter(user__email='shop@airvoucher.local').exists():
            return

        retailer = create_retailer(
            profile_data={'full_name': 'Sample Shop Owner', 'email': 'shop@airvoucher.local'},
            retailer_data={
                'name': 'Sample Spaza',
                'location': 'Soweto',
                'agent_id': agent.id,
                'commission_group_id': group.id,
                'credit_limit': Decimal('200.00'),
                'initial_balance': Decimal('1000.00'),
            },
            password=SAMPLE_PASSWORD,
        )
        create_terminal_with_user(
            name='Front counter',
            contact_person='Sample Cashier',
            retailer_id=retailer.id,
            email='till@airvoucher.local',
            password=SAMPLE_PASSWORD,
        )

    def create_stock(self, voucher_types, uploaded_by, per_amount):
        self.stdout.write('  Creating voucher stock...')

        vouchers = []
        for voucher_type in voucher_types.values():
            if voucher_type.category != VoucherCategory.AIRTIME:
                continue
            for amount in STOCK_AMOUNTS:
                for _ in range(per_amount):
                    vouchers.append({
                        'voucher_type_id': voucher_type.id,
                        'amount': Decimal(amount),
                        'pin': ''.join(random.choices('0123456789', k=16)),
                        'serial_number': ''.join(random.choices('0123456789', k=10)),
                    })

        count = upload_vouchers(vouchers=vouchers, uploaded_by=uploaded_by)
        self.stdout.write(f'    {count} vouchers')
