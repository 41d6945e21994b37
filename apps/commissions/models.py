from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Q
from decimal import Decimal
import uuid

from apps.vouchers.models import VoucherType

PERCENT_VALIDATORS = [MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]


class CommissionGroup(models.Model):
    """A named commission structure that retailers are assigned to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'commission_groups'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class CommissionGroupRate(models.Model):
    """
    Default split for one voucher type inside a group.

    All three values are percentages of the voucher face value (0-100).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    commission_group = models.ForeignKey(
        CommissionGroup,
        on_delete=models.CASCADE,
        related_name='rates',
    )
    voucher_type = models.ForeignKey(
        VoucherType,
        on_delete=models.CASCADE,
        related_name='commission_rates',
    )
    retailer_pct = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'), validators=PERCENT_VALIDATORS)
    agent_pct = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'), validators=PERCENT_VALIDATORS)
    supplier_pct = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'), validators=PERCENT_VALIDATORS)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'commission_group_rates'
        ordering = ['voucher_type__name']
        constraints = [
            models.UniqueConstraint(
                fields=['commission_group', 'voucher_type'],
                name='unique_group_voucher_type_rate',
            ),
        ]

    def __str__(self):
        return f"{self.commission_group.name} / {self.voucher_type.name}"


class CommissionType(models.TextChoices):
    FIXED = 'fixed', 'Fixed amount'
    PERCENTAGE = 'percentage', 'Percentage'


class VoucherCommissionOverride(models.Model):
    """
    Commission for one face value of one voucher type.

    With a commission group the override applies to that group only; a
    null group makes it the global override. For the percentage type the
    values are fractions (0.05 = 5%); for the fixed type they are rand
    amounts per voucher.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    commission_group = models.ForeignKey(
        CommissionGroup,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='overrides',
    )
    voucher_type = models.ForeignKey(
        VoucherType,
        on_delete=models.CASCADE,
        related_name='commission_overrides',
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    supplier_pct = models.DecimalField(max_digits=10, decimal_places=4, default=Decimal('0'))
    retailer_pct = models.DecimalField(max_digits=10, decimal_places=4, default=Decimal('0'))
    agent_pct = models.DecimalField(max_digits=10, decimal_places=4, default=Decimal('0'))
    commission_type = models.CharField(
        max_length=20,
        choices=CommissionType.choices,
        default=CommissionType.PERCENTAGE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'voucher_commission_overrides'
        ordering = ['amount']
        constraints = [
            models.UniqueConstraint(
                fields=['commission_group', 'voucher_type', 'amount'],
                condition=Q(commission_group__isnull=False),
                name='unique_group_override',
            ),
            models.UniqueConstraint(
                fields=['voucher_type', 'amount'],
                condition=Q(commission_group__isnull=True),
                name='unique_global_override',
            ),
        ]

    def __str__(self):
        scope = self.commission_group.name if self.commission_group_id else 'global'
        return f"{self.voucher_type.name} R{self.amount} ({scope})"
