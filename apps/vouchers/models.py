from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from decimal import Decimal
import uuid


class VoucherCategory(models.TextChoices):
    AIRTIME = 'airtime', 'Airtime'
    DATA = 'data', 'Data'
    OTHER = 'other', 'Other'
    BILL_PAYMENT = 'bill_payment', 'Bill Payment'


class DataDuration(models.TextChoices):
    DAILY = 'daily', 'Daily'
    WEEKLY = 'weekly', 'Weekly'
    MONTHLY = 'monthly', 'Monthly'


class NetworkProvider(models.TextChoices):
    CELLC = 'cellc', 'CellC'
    MTN = 'mtn', 'MTN'
    VODACOM = 'vodacom', 'Vodacom'
    TELKOM = 'telkom', 'Telkom'


class VoucherType(models.Model):
    """A sellable product line such as Ringa or Vodacom Daily Data."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    supplier_commission_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text='Commission paid by the supplier, in percent of face value',
    )
    category = models.CharField(max_length=20, choices=VoucherCategory.choices, null=True, blank=True)
    sub_category = models.CharField(max_length=20, choices=DataDuration.choices, null=True, blank=True)
    network_provider = models.CharField(max_length=20, choices=NetworkProvider.choices, null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'voucher_types'
        ordering = ['name']
        indexes = [
            models.Index(fields=['network_provider', 'category', 'sub_category'], name='voucher_typ_network_3f1c2a_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def icon(self):
        """Icon name used by the inventory overview."""
        name = self.name.lower()
        if 'ringa' in name:
            return 'phone'
        if 'hollywood' in name:
            return 'film'
        if 'easyload' in name:
            return 'zap'
        return 'credit-card'


class VoucherStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    SOLD = 'sold', 'Sold'
    DISABLED = 'disabled', 'Disabled'


class VoucherInventory(models.Model):
    """One uploaded voucher PIN."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    voucher_type = models.ForeignKey(
        VoucherType,
        on_delete=models.PROTECT,
        related_name='inventory',
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    pin = models.CharField(max_length=64)
    serial_number = models.CharField(max_length=64, blank=True)
    expiry_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=VoucherStatus.choices,
        default=VoucherStatus.AVAILABLE,
    )
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='uploaded_vouchers',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'voucher_inventory'
        ordering = ['created_at']
        verbose_name_plural = 'voucher inventory'
        indexes = [
            models.Index(fields=['voucher_type', 'status', 'amount'], name='voucher_inv_type_st_8d2e41_idx'),
            models.Index(fields=['status'], name='voucher_inv_status_5a7b90_idx'),
        ]

    def __str__(self):
        return f"{self.voucher_type.name} R{self.amount} ({self.status})"
