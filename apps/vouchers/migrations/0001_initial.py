# Generated manually for the vouchers app

import uuid
from decimal import Decimal
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='VoucherType',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('supplier_commission_pct', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Commission paid by the supplier, in percent of face value', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('category', models.CharField(blank=True, choices=[('airtime', 'Airtime'), ('data', 'Data'), ('other', 'Other'), ('bill_payment', 'Bill Payment')], max_length=20, null=True)),
                ('sub_category', models.CharField(blank=True, choices=[('daily', 'Daily'), ('weekly', 'Weekly'), ('monthly', 'Monthly')], max_length=20, null=True)),
                ('network_provider', models.CharField(blank=True, choices=[('cellc', 'CellC'), ('mtn', 'MTN'), ('vodacom', 'Vodacom'), ('telkom', 'Telkom')], max_length=20, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'voucher_types',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['network_provider', 'category', 'sub_category'], name='voucher_typ_network_3f1c2a_idx')],
            },
        ),
        migrations.CreateModel(
            name='VoucherInventory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('pin', models.CharField(max_length=64)),
                ('serial_number', models.CharField(blank=True, max_length=64)),
                ('expiry_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('available', 'Available'), ('sold', 'Sold'), ('disabled', 'Disabled')], default='available', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_vouchers', to=settings.AUTH_USER_MODEL)),
                ('voucher_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='inventory', to='vouchers.vouchertype')),
            ],
            options={
                'verbose_name_plural': 'voucher inventory',
                'db_table': 'voucher_inventory',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['voucher_type', 'status', 'amount'], name='voucher_inv_type_st_8d2e41_idx'),
                    models.Index(fields=['status'], name='voucher_inv_status_5a7b90_idx'),
                ],
            },
        ),
    ]
