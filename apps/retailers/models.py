from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid

from apps.commissions.models import CommissionGroup


class RetailerStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    SUSPENDED = 'suspended', 'Suspended'
    INACTIVE = 'inactive', 'Inactive'


class Retailer(models.Model):
    """
    A shop that sells vouchers through its terminals.

    balance is the prepaid float; it may go negative down to
    -credit_limit. commission_balance accumulates the retailer's share of
    commission on every sale.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='retailer',
    )
    name = models.CharField(max_length=200)

    # Contact
    contact_name = models.CharField(max_length=150, blank=True)
    contact_email = models.EmailField(max_length=255, blank=True)
    contact_phone = models.CharField(max_length=30, blank=True)
    location = models.CharField(max_length=255, blank=True)
    secondary_contact_name = models.CharField(max_length=150, blank=True)
    secondary_contact_phone = models.CharField(max_length=30, blank=True)

    agent = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='agent_retailers',
        limit_choices_to={'role': 'agent'},
    )
    commission_group = models.ForeignKey(
        CommissionGroup,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='retailers',
    )

    # Money
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    credit_limit = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    credit_used = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    commission_balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(max_length=20, choices=RetailerStatus.choices, default=RetailerStatus.ACTIVE)
    short_code = models.CharField(max_length=12, unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'retailers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['status'], name='retailers_status_9a1e3c_idx'),
            models.Index(fields=['agent'], name='retailers_agent_i_2f7d51_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.short_code})"

    @property
    def available_credit(self):
        """Amount that can still be spent before the credit limit is hit."""
        return self.balance + self.credit_limit

    def set_balance(self, balance):
        """Set the balance; credit_used follows whatever is below zero."""
        self.balance = balance
        self.credit_used = max(-balance, Decimal('0.00'))


class TerminalStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class Terminal(models.Model):
    """A point-of-sale device (or login) belonging to a retailer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    retailer = models.ForeignKey(
        Retailer,
        on_delete=models.CASCADE,
        related_name='terminals',
    )
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='terminal',
    )
    name = models.CharField(max_length=150)
    status = models.CharField(max_length=20, choices=TerminalStatus.choices, default=TerminalStatus.ACTIVE)
    last_active = models.DateTimeField(null=True, blank=True)
    short_code = models.CharField(max_length=16, unique=True)
    serial_number = models.CharField(max_length=64, blank=True)
    imei_number = models.CharField(max_length=32, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'terminals'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} ({self.short_code})"
