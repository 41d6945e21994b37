# Generated manually for the commissions app

import uuid
from decimal import Decimal
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion

PERCENT_VALIDATORS = [
    django.core.validators.MinValueValidator(Decimal('0')),
    django.core.validators.MaxValueValidator(Decimal('100')),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('vouchers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='CommissionGroup',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('description', models.TextField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'commission_groups',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='CommissionGroupRate',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('retailer_pct', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=PERCENT_VALIDATORS)),
                ('agent_pct', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=PERCENT_VALIDATORS)),
                ('supplier_pct', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=PERCENT_VALIDATORS)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('commission_group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rates', to='commissions.commissiongroup')),
                ('voucher_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commission_rates', to='vouchers.vouchertype')),
            ],
            options={
                'db_table': 'commission_group_rates',
                'ordering': ['voucher_type__name'],
            },
        ),
        migrations.AddConstraint(
            model_name='commissiongrouprate',
            constraint=models.UniqueConstraint(fields=('commission_group', 'voucher_type'), name='unique_group_voucher_type_rate'),
        ),
        migrations.CreateModel(
            name='VoucherCommissionOverride',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('supplier_pct', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=10)),
                ('retailer_pct', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=10)),
                ('agent_pct', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=10)),
                ('commission_type', models.CharField(choices=[('fixed', 'Fixed amount'), ('percentage', 'Percentage')], default='percentage', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('commission_group', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='overrides', to='commissions.commissiongroup')),
                ('voucher_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commission_overrides', to='vouchers.vouchertype')),
            ],
            options={
                'db_table': 'voucher_commission_overrides',
                'ordering': ['amount'],
            },
        ),
        migrations.AddConstraint(
            model_name='vouchercommissionoverride',
            constraint=models.UniqueConstraint(condition=models.Q(('commission_group__isnull', False)), fields=('commission_group', 'voucher_type', 'amount'), name='unique_group_override'),
        ),
        migrations.AddConstraint(
            model_name='vouchercommissionoverride',
            constraint=models.UniqueConstraint(condition=models.Q(('commission_group__isnull', True)), fields=('voucher_type', 'amount'), name='unique_global_override'),
        ),
    ]
