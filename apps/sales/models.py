from django.db import models
from decimal import Decimal
import uuid

from apps.retailers.models import Terminal
from apps.vouchers.models import VoucherInventory


class Sale(models.Model):
    """
    One voucher sold by a terminal.

    The commission split is frozen on the row at sale time. Vouchers sold
    together in one request share a batch_id.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    terminal = models.ForeignKey(
        Terminal,
        on_delete=models.PROTECT,
        related_name='sales',
    )
    voucher_inventory = models.OneToOneField(
        VoucherInventory,
        on_delete=models.PROTECT,
        related_name='sale',
    )
    sale_amount = models.DecimalField(max_digits=10, decimal_places=2)
    supplier_commission = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    retailer_commission = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    agent_commission = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    profit = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    ref_number = models.CharField(max_length=32, unique=True)
    batch_id = models.UUIDField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sales'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='sales_created_8b3e1f_idx'),
            models.Index(fields=['batch_id'], name='sales_batch_i_4a2c7d_idx'),
        ]

    def __str__(self):
        return f"{self.ref_number}: R{self.sale_amount}"
