"""Service layer tests for the vouchers app."""

from decimal import Decimal

import pytest

from apps.vouchers.models import VoucherInventory, VoucherStatus
from apps.vouchers.services import (
    process_voucher_file,
    upload_vouchers,
    disable_voucher,
    reserve_available_vouchers,
    fetch_voucher_inventory,
    fetch_voucher_type_summaries,
    fetch_network_voucher_summaries,
    fetch_network_category_stats,
    update_supplier_commission,
    fetch_voucher_types,
)
from apps.vouchers.services.exceptions import (
    EmptyInventoryError,
    InsufficientStockError,
    VoucherFileError,
    VoucherNotFoundError,
)

RINGA_FILE = '\n'.join([
    'H|SUPPLIER|20260101',
    'D|RINGA0100|100.00|0|100.00|01/06/2026|1|SER001|PIN001',
    'D|RINGA0050|50.00|0|50.00|01/06/2026|2|SER002|PIN002',
    'D|RINGA0050|oops|0|50.00|01/06/2026|3|SER003|PIN003',
    'T|3',
])


@pytest.mark.django_db
class TestVoucherUpload:

    def test_process_file_stores_valid_lines(self, voucher_type, admin_user):
        result = process_voucher_file(content=RINGA_FILE, uploaded_by=admin_user)

        assert result['type_name'] == 'Ringa'
        assert result['uploaded'] == 2
        assert result['total_lines'] == 5
        assert result['errors'] == ['Line 4: Invalid amount']
        assert VoucherInventory.objects.filter(
            voucher_type=voucher_type, status=VoucherStatus.AVAILABLE, uploaded_by=admin_user
        ).count() == 2

    def test_process_file_without_valid_lines(self, voucher_type):
        with pytest.raises(VoucherFileError) as exc_info:
            process_voucher_file(content='D|RINGA0050|oops|0|50.00|01/06/2026|3|SER|PIN')

        assert exc_info.value.errors == ['Line 1: Invalid amount']
        assert not VoucherInventory.objects.exists()

    def test_upload_dicts(self, voucher_type):
        count = upload_vouchers(vouchers=[
            {'voucher_type_id': voucher_type.id, 'amount': Decimal('10'), 'pin': 'A'},
            {'voucher_type_id': voucher_type.id, 'amount': Decimal('10'), 'pin': 'B', 'serial_number': 'S'},
        ])

        assert count == 2
        assert VoucherInventory.objects.get(pin='A').serial_number == ''


@pytest.mark.django_db
class TestInventory:

    def test_fetch_empty_inventory(self, voucher_type):
        with pytest.raises(EmptyInventoryError):
            fetch_voucher_inventory(voucher_type_id=voucher_type.id)

    def test_disable_voucher(self, voucher_type, make_vouchers):
        voucher, = make_vouchers(voucher_type, '10.00')

        disable_voucher(voucher_id=voucher.id)

        voucher.refresh_from_db()
        assert voucher.status == VoucherStatus.DISABLED

    def test_disable_unknown_voucher(self, db):
        with pytest.raises(VoucherNotFoundError):
            disable_voucher(voucher_id='00000000-0000-0000-0000-000000000000')

    def test_reserve_oldest_first(self, voucher_type, make_vouchers):
        vouchers = make_vouchers(voucher_type, '10.00', count=3)
        make_vouchers(voucher_type, '20.00', count=1)

        reserved = reserve_available_vouchers(voucher_type_id=voucher_type.id, amount=Decimal('10.00'), quantity=2)

        assert [v.id for v in reserved] == [vouchers[0].id, vouchers[1].id]

    def test_reserve_skips_sold_and_disabled(self, voucher_type, make_vouchers):
        sold, disabled, available = make_vouchers(voucher_type, '10.00', count=3)
        VoucherInventory.objects.filter(id=sold.id).update(status=VoucherStatus.SOLD)
        VoucherInventory.objects.filter(id=disabled.id).update(status=VoucherStatus.DISABLED)

        reserved = reserve_available_vouchers(voucher_type_id=voucher_type.id, amount=Decimal('10.00'))

        assert [v.id for v in reserved] == [available.id]

    def test_reserve_insufficient_stock(self, voucher_type, make_vouchers):
        make_vouchers(voucher_type, '10.00', count=1)

        with pytest.raises(InsufficientStockError):
            reserve_available_vouchers(voucher_type_id=voucher_type.id, amount=Decimal('10.00'), quantity=2)


@pytest.mark.django_db
class TestVoucherTypes:

    def test_update_supplier_commission(self, voucher_type):
        updated = update_supplier_commission(
            voucher_type_id=voucher_type.id, supplier_commission_pct=Decimal('12.50')
        )
        assert updated.supplier_commission_pct == Decimal('12.50')

    def test_inactive_types_hidden_by_default(self, voucher_type, data_voucher_type):
        data_voucher_type.is_active = False
        data_voucher_type.save()

        assert list(fetch_voucher_types()) == [voucher_type]
        assert len(fetch_voucher_types(include_inactive=True)) == 2

    def test_filter_by_network(self, voucher_type, data_voucher_type):
        assert list(fetch_voucher_types(network_provider='vodacom')) == [data_voucher_type]


@pytest.mark.django_db
class TestSummaries:

    def test_type_summary(self, voucher_type, make_vouchers):
        make_vouchers(voucher_type, '10.00', count=2)
        sold, = make_vouchers(voucher_type, '50.00')
        VoucherInventory.objects.filter(id=sold.id).update(status=VoucherStatus.SOLD)

        summary, = fetch_voucher_type_summaries()

        assert summary['total_vouchers'] == 3
        assert summary['available_vouchers'] == 2
        assert summary['sold_vouchers'] == 1
        assert summary['unique_amounts'] == [Decimal('10.00')]
        assert summary['total_value'] == Decimal('20.00')
        assert summary['icon'] == 'phone'

    def test_network_summaries(self, voucher_type, data_voucher_type, make_vouchers):
        make_vouchers(data_voucher_type, '12.00', count=2)

        result = fetch_network_voucher_summaries()

        vodacom, = result['networks']
        assert vodacom['network_provider'] == 'vodacom'
        assert vodacom['total_vouchers'] == 2
        assert vodacom['categories']['data']['daily']['available_count'] == 2
        # Ringa has no network provider
        assert [s['name'] for s in result['other']] == ['Ringa']

    def test_category_stats(self, data_voucher_type, make_vouchers):
        available, sold = make_vouchers(data_voucher_type, '12.00', count=2)
        VoucherInventory.objects.filter(id=sold.id).update(status=VoucherStatus.SOLD)

        stats = fetch_network_category_stats(network_provider='vodacom', category='data')

        assert stats == {
            'total_vouchers': 2,
            'inventory_value': Decimal('12.00'),
            'sold_value': Decimal('12.00'),
        }
