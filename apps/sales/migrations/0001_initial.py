# Generated manually for the sales app

import uuid
from decimal import Decimal
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('retailers', '0001_initial'),
        ('vouchers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Sale',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sale_amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('supplier_commission', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('retailer_commission', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('agent_commission', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('profit', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('ref_number', models.CharField(max_length=32, unique=True)),
                ('batch_id', models.UUIDField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('terminal', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sales', to='retailers.terminal')),
                ('voucher_inventory', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='sale', to='vouchers.voucherinventory')),
            ],
            options={
                'db_table': 'sales',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['created_at'], name='sales_created_8b3e1f_idx'),
                    models.Index(fields=['batch_id'], name='sales_batch_i_4a2c7d_idx'),
                ],
            },
        ),
    ]
