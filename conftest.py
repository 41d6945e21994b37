"""
Fixtures shared by the app test suites.

Fixtures used by a single test module live in that module.
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import AdminPermission, User
from apps.commissions.models import CommissionGroup, CommissionGroupRate
from apps.finance.models import DepositFeeConfiguration, DepositMethod, FeeType
from apps.retailers.models import Retailer, Terminal
from apps.vouchers.models import VoucherInventory, VoucherType, VoucherCategory, NetworkProvider


def authenticate(client, user):
    """Attach a JWT access token for user to client."""
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def super_admin(db):
    return User.objects.create_user(
        email='super@example.com',
        password='SuperPass123',
        full_name='Super Admin',
        role=User.Role.ADMIN,
        is_super_admin=True,
    )


@pytest.fixture
def admin_user(db):
    """Admin without any granted permission."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123',
        full_name='Plain Admin',
        role=User.Role.ADMIN,
    )


@pytest.fixture
def grant(db):
    """Grant permission keys to an admin: grant(admin, PermissionKey.X, ...)."""
    def _grant(admin, *keys):
        for key in keys:
            AdminPermission.objects.get_or_create(admin=admin, permission_key=key)
        return admin
    return _grant


@pytest.fixture
def agent_user(db):
    return User.objects.create_user(
        email='agent@example.com',
        password='AgentPass123',
        full_name='Andile Agent',
        role=User.Role.AGENT,
    )


@pytest.fixture
def super_admin_client(super_admin):
    return authenticate(APIClient(), super_admin)


@pytest.fixture
def admin_client(admin_user):
    return authenticate(APIClient(), admin_user)


# =============================================================================
# Vouchers and commissions
# =============================================================================

@pytest.fixture
def voucher_type(db):
    return VoucherType.objects.create(
        name='Ringa',
        supplier_commission_pct=Decimal('10.00'),
        category=VoucherCategory.AIRTIME,
    )


@pytest.fixture
def data_voucher_type(db):
    return VoucherType.objects.create(
        name='Vodacom Daily Data',
        supplier_commission_pct=Decimal('5.00'),
        category=VoucherCategory.DATA,
        sub_category='daily',
        network_provider=NetworkProvider.VODACOM,
    )


@pytest.fixture
def make_vouchers(db):
    """Create available vouchers: make_vouchers(voucher_type, amount, count)."""
    def _make(voucher_type, amount, count=1):
        return [
            VoucherInventory.objects.create(
                voucher_type=voucher_type,
                amount=Decimal(amount),
                pin=f'PIN{voucher_type.name[:3].upper()}{amount}{i:04d}',
                serial_number=f'SN{i:06d}',
            )
            for i in range(count)
        ]
    return _make


@pytest.fixture
def commission_group(db, voucher_type):
    group = CommissionGroup.objects.create(name='Gold', description='Top tier retailers')
    CommissionGroupRate.objects.create(
        commission_group=group,
        voucher_type=voucher_type,
        retailer_pct=Decimal('4.00'),
        agent_pct=Decimal('1.00'),
        supplier_pct=Decimal('10.00'),
    )
    return group


# =============================================================================
# Retailers and terminals
# =============================================================================

@pytest.fixture
def retailer_user(db):
    return User.objects.create_user(
        email='shop@example.com',
        password='ShopPass123',
        full_name='Sipho Shop',
        role=User.Role.RETAILER,
    )


@pytest.fixture
def retailer(db, retailer_user, agent_user, commission_group):
    return Retailer.objects.create(
        user=retailer_user,
        name='Corner Spaza',
        contact_name='Sipho Shop',
        contact_email='shop@example.com',
        agent=agent_user,
        commission_group=commission_group,
        balance=Decimal('500.00'),
        credit_limit=Decimal('100.00'),
        short_code='ABC234',
    )


@pytest.fixture
def terminal_user(db):
    return User.objects.create_user(
        email='till1@example.com',
        password='TillPass123',
        full_name='Till One',
        role=User.Role.TERMINAL,
    )


@pytest.fixture
def terminal(db, retailer, terminal_user):
    return Terminal.objects.create(
        retailer=retailer,
        user=terminal_user,
        name='Till 1',
        short_code='ABC234-01',
    )


@pytest.fixture
def retailer_client(retailer, retailer_user):
    return authenticate(APIClient(), retailer_user)


@pytest.fixture
def terminal_client(terminal, terminal_user):
    return authenticate(APIClient(), terminal_user)


# =============================================================================
# Finance
# =============================================================================

@pytest.fixture
def deposit_fees(db):
    """EFT free, ATM R10 fixed, Counter 1.5%, Branch R25 fixed."""
    configs = [
        (DepositMethod.EFT, FeeType.FIXED, Decimal('0.00')),
        (DepositMethod.ATM, FeeType.FIXED, Decimal('10.00')),
        (DepositMethod.COUNTER, FeeType.PERCENTAGE, Decimal('1.50')),
        (DepositMethod.BRANCH, FeeType.FIXED, Decimal('25.00')),
    ]
    return {
        method: DepositFeeConfiguration.objects.create(
            deposit_method=method, fee_type=fee_type, fee_value=value
        )
        for method, fee_type, value in configs
    }


@pytest.fixture
def client_for(db):
    """Return an API client authenticated as the given user."""
    def _client_for(user):
        return authenticate(APIClient(), user)
    return _client_for
