# Generated manually for the finance app

import uuid
from decimal import Decimal
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion

DEPOSIT_METHODS = [('EFT', 'EFT'), ('ATM', 'ATM'), ('Counter', 'Counter'), ('Branch', 'Branch')]
FEE_TYPES = [('fixed', 'Fixed amount'), ('percentage', 'Percentage')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('retailers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DepositFeeConfiguration',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('deposit_method', models.CharField(choices=DEPOSIT_METHODS, max_length=20, unique=True)),
                ('fee_type', models.CharField(choices=FEE_TYPES, default='fixed', max_length=20)),
                ('fee_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'deposit_fee_configurations',
                'ordering': ['deposit_method'],
            },
        ),
        migrations.CreateModel(
            name='RetailerDeposit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount_deposited', models.DecimalField(decimal_places=2, max_digits=12)),
                ('deposit_method', models.CharField(choices=DEPOSIT_METHODS, max_length=20)),
                ('fee_type', models.CharField(choices=FEE_TYPES, max_length=20)),
                ('fee_value', models.DecimalField(decimal_places=2, max_digits=10)),
                ('fee_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('net_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('balance_before', models.DecimalField(decimal_places=2, max_digits=12)),
                ('balance_after', models.DecimalField(decimal_places=2, max_digits=12)),
                ('adjustment_type', models.CharField(choices=[('deposit', 'Deposit'), ('removal', 'Removal')], default='deposit', max_length=20)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('processed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='processed_deposits', to=settings.AUTH_USER_MODEL)),
                ('retailer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deposits', to='retailers.retailer')),
            ],
            options={
                'db_table': 'retailer_deposits',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['retailer', '-created_at'], name='retailer_de_retaile_6c4b2e_idx')],
            },
        ),
        migrations.CreateModel(
            name='CreditLimitAdjustment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('adjustment_type', models.CharField(choices=[('increase', 'Increase'), ('decrease', 'Decrease')], max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('credit_limit_before', models.DecimalField(decimal_places=2, max_digits=12)),
                ('credit_limit_after', models.DecimalField(decimal_places=2, max_digits=12)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('processed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='processed_credit_adjustments', to=settings.AUTH_USER_MODEL)),
                ('retailer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='credit_adjustments', to='retailers.retailer')),
            ],
            options={
                'db_table': 'retailer_credit_history',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['retailer', '-created_at'], name='retailer_cr_retaile_1d8f3a_idx')],
            },
        ),
    ]
