"""
Service layer tests for the finance app.

Tests cover:
- Fee calculation for fixed and percentage fees
- Deposits and removals, including the credit limit floor
- Credit limit adjustments and their audit trail
"""

from decimal import Decimal

import pytest

from apps.finance.models import CreditLimitAdjustment, DepositMethod, FeeType, RetailerDeposit
from apps.finance.services import (
    calculate_deposit_fee,
    process_retailer_deposit,
    process_credit_limit_adjustment,
    fetch_retailer_deposit_history,
    fetch_retailer_credit_history,
    update_deposit_fee_configuration,
)
from apps.finance.services.exceptions import (
    FeeConfigurationNotFoundError,
    InvalidCreditAdjustmentError,
    InvalidDepositError,
    RetailerNotFoundError,
)

MISSING_ID = '00000000-0000-0000-0000-000000000000'


class TestCalculateDepositFee:

    @pytest.mark.parametrize('amount, fee_type, fee_value, expected', [
        ('1000.00', FeeType.FIXED, '10.00', '10.00'),
        ('1000.00', FeeType.PERCENTAGE, '1.50', '15.00'),
        ('333.33', FeeType.PERCENTAGE, '1.50', '5.00'),
        ('10.00', FeeType.PERCENTAGE, '2.25', '0.23'),
        ('500.00', FeeType.FIXED, '0', '0.00'),
    ])
    def test_fee(self, amount, fee_type, fee_value, expected):
        assert calculate_deposit_fee(Decimal(amount), fee_type, Decimal(fee_value)) == Decimal(expected)


@pytest.mark.django_db
class TestDeposits:

    def test_deposit_adds_net_amount(self, retailer, deposit_fees, admin_user):
        deposit = process_retailer_deposit(
            retailer_id=retailer.id,
            amount_deposited=Decimal('1000.00'),
            deposit_method=DepositMethod.ATM,
            notes='Cash at ATM',
            processed_by=admin_user,
        )

        assert deposit.fee_amount == Decimal('10.00')
        assert deposit.net_amount == Decimal('990.00')
        assert deposit.balance_before == Decimal('500.00')
        assert deposit.balance_after == Decimal('1490.00')
        assert deposit.fee_type == FeeType.FIXED
        retailer.refresh_from_db()
        assert retailer.balance == Decimal('1490.00')

    def test_percentage_fee_snapshot(self, retailer, deposit_fees):
        deposit = process_retailer_deposit(
            retailer_id=retailer.id,
            amount_deposited=Decimal('200.00'),
            deposit_method=DepositMethod.COUNTER,
        )

        update_deposit_fee_configuration(
            deposit_method=DepositMethod.COUNTER, fee_type=FeeType.FIXED, fee_value=Decimal('50.00')
        )

        deposit.refresh_from_db()
        assert deposit.fee_type == FeeType.PERCENTAGE
        assert deposit.fee_value == Decimal('1.50')
        assert deposit.fee_amount == Decimal('3.00')

    def test_amount_must_exceed_fee(self, retailer, deposit_fees):
        with pytest.raises(InvalidDepositError, match='greater than the fee'):
            process_retailer_deposit(
                retailer_id=retailer.id,
                amount_deposited=Decimal('25.00'),
                deposit_method=DepositMethod.BRANCH,
            )
        assert not RetailerDeposit.objects.exists()

    def test_removal_within_credit_limit(self, retailer, deposit_fees):
        deposit = process_retailer_deposit(
            retailer_id=retailer.id,
            amount_deposited=Decimal('600.00'),
            deposit_method=DepositMethod.EFT,
            adjustment_type='removal',
        )

        assert deposit.balance_after == Decimal('-100.00')
        retailer.refresh_from_db()
        assert retailer.credit_used == Decimal('100.00')

    def test_deposit_pays_back_credit_used(self, retailer, deposit_fees):
        retailer.set_balance(Decimal('-100.00'))
        retailer.save()

        process_retailer_deposit(
            retailer_id=retailer.id,
            amount_deposited=Decimal('1000.00'),
            deposit_method=DepositMethod.COUNTER,
        )

        retailer.refresh_from_db()
        assert retailer.balance == Decimal('885.00')
        assert retailer.credit_used == Decimal('0.00')

    def test_partial_deposit_reduces_credit_used(self, retailer, deposit_fees):
        retailer.set_balance(Decimal('-100.00'))
        retailer.save()

        process_retailer_deposit(
            retailer_id=retailer.id,
            amount_deposited=Decimal('40.00'),
            deposit_method=DepositMethod.EFT,
        )

        retailer.refresh_from_db()
        assert retailer.balance == Decimal('-60.00')
        assert retailer.credit_used == Decimal('60.00')

    def test_removal_past_credit_limit(self, retailer, deposit_fees):
        with pytest.raises(InvalidDepositError) as exc_info:
            process_retailer_deposit(
                retailer_id=retailer.id,
                amount_deposited=Decimal('600.01'),
                deposit_method=DepositMethod.EFT,
                adjustment_type='removal',
            )

        assert str(exc_info.value) == (
            'Cannot remove R 600.01. Would exceed credit limit. '
            'Minimum allowed balance: -R 100.00 (Current: R 500.00)'
        )
        retailer.refresh_from_db()
        assert retailer.balance == Decimal('500.00')

    def test_unknown_retailer(self, deposit_fees):
        with pytest.raises(RetailerNotFoundError):
            process_retailer_deposit(
                retailer_id=MISSING_ID,
                amount_deposited=Decimal('100.00'),
                deposit_method=DepositMethod.EFT,
            )

    def test_missing_fee_configuration(self, retailer):
        with pytest.raises(FeeConfigurationNotFoundError):
            process_retailer_deposit(
                retailer_id=retailer.id,
                amount_deposited=Decimal('100.00'),
                deposit_method=DepositMethod.EFT,
            )

    def test_history_newest_first(self, retailer, deposit_fees):
        for amount in ('100.00', '200.00'):
            process_retailer_deposit(
                retailer_id=retailer.id,
                amount_deposited=Decimal(amount),
                deposit_method=DepositMethod.EFT,
            )

        history = list(fetch_retailer_deposit_history(retailer_id=retailer.id))

        assert [d.amount_deposited for d in history] == [Decimal('200.00'), Decimal('100.00')]


@pytest.mark.django_db
class TestCreditLimit:

    def test_increase(self, retailer, admin_user):
        adjustment = process_credit_limit_adjustment(
            retailer_id=retailer.id,
            adjustment_type='increase',
            amount=Decimal('250.00'),
            processed_by=admin_user,
        )

        assert adjustment.credit_limit_before == Decimal('100.00')
        assert adjustment.credit_limit_after == Decimal('350.00')
        retailer.refresh_from_db()
        assert retailer.credit_limit == Decimal('350.00')

    def test_decrease_to_zero(self, retailer):
        process_credit_limit_adjustment(
            retailer_id=retailer.id, adjustment_type='decrease', amount=Decimal('100.00')
        )

        retailer.refresh_from_db()
        assert retailer.credit_limit == Decimal('0.00')

    def test_decrease_below_zero(self, retailer):
        with pytest.raises(InvalidCreditAdjustmentError, match='Credit limit cannot be negative'):
            process_credit_limit_adjustment(
                retailer_id=retailer.id, adjustment_type='decrease', amount=Decimal('100.01')
            )
        assert not CreditLimitAdjustment.objects.exists()

    def test_unknown_retailer(self, db):
        with pytest.raises(RetailerNotFoundError):
            process_credit_limit_adjustment(
                retailer_id=MISSING_ID, adjustment_type='increase', amount=Decimal('1.00')
            )

    def test_history(self, retailer):
        process_credit_limit_adjustment(retailer_id=retailer.id, adjustment_type='increase', amount=Decimal('5'))

        assert fetch_retailer_credit_history(retailer_id=retailer.id).count() == 1
