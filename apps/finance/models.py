from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid

from apps.retailers.models import Retailer


class DepositMethod(models.TextChoices):
    EFT = 'EFT', 'EFT'
    ATM = 'ATM', 'ATM'
    COUNTER = 'Counter', 'Counter'
    BRANCH = 'Branch', 'Branch'


class FeeType(models.TextChoices):
    FIXED = 'fixed', 'Fixed amount'
    PERCENTAGE = 'percentage', 'Percentage'


class DepositFeeConfiguration(models.Model):
    """Bank fee charged on deposits made through one method."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    deposit_method = models.CharField(max_length=20, choices=DepositMethod.choices, unique=True)
    fee_type = models.CharField(max_length=20, choices=FeeType.choices, default=FeeType.FIXED)
    fee_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'deposit_fee_configurations'
        ordering = ['deposit_method']

    def __str__(self):
        return f"{self.deposit_method}: {self.fee_value} ({self.fee_type})"


class DepositAdjustmentType(models.TextChoices):
    DEPOSIT = 'deposit', 'Deposit'
    REMOVAL = 'removal', 'Removal'


class RetailerDeposit(models.Model):
    """
    Audit row of one balance deposit or removal.

    The fee configuration in force is copied onto the row so later fee
    changes do not alter history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    retailer = models.ForeignKey(
        Retailer,
        on_delete=models.CASCADE,
        related_name='deposits',
    )
    amount_deposited = models.DecimalField(max_digits=12, decimal_places=2)
    deposit_method = models.CharField(max_length=20, choices=DepositMethod.choices)
    fee_type = models.CharField(max_length=20, choices=FeeType.choices)
    fee_value = models.DecimalField(max_digits=10, decimal_places=2)
    fee_amount = models.DecimalField(max_digits=12, decimal_places=2)
    net_amount = models.DecimalField(max_digits=12, decimal_places=2)
    balance_before = models.DecimalField(max_digits=12, decimal_places=2)
    balance_after = models.DecimalField(max_digits=12, decimal_places=2)
    adjustment_type = models.CharField(
        max_length=20,
        choices=DepositAdjustmentType.choices,
        default=DepositAdjustmentType.DEPOSIT,
    )
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_deposits',
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'retailer_deposits'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['retailer', '-created_at'], name='retailer_de_retaile_6c4b2e_idx'),
        ]

    def __str__(self):
        return f"{self.adjustment_type} R{self.net_amount} for {self.retailer_id}"


class CreditAdjustmentType(models.TextChoices):
    INCREASE = 'increase', 'Increase'
    DECREASE = 'decrease', 'Decrease'


class CreditLimitAdjustment(models.Model):
    """Audit row of one credit limit change."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    retailer = models.ForeignKey(
        Retailer,
        on_delete=models.CASCADE,
        related_name='credit_adjustments',
    )
    adjustment_type = models.CharField(max_length=20, choices=CreditAdjustmentType.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    credit_limit_before = models.DecimalField(max_digits=12, decimal_places=2)
    credit_limit_after = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True, null=True)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_credit_adjustments',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'retailer_credit_history'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['retailer', '-created_at'], name='retailer_cr_retaile_1d8f3a_idx'),
        ]

    def __str__(self):
        return f"{self.adjustment_type} R{self.amount} for {self.retailer_id}"
