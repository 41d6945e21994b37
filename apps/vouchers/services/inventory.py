"""Voucher inventory service: uploads, disabling and stock reservation."""

import logging
from dataclasses import asdict
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from ..models import VoucherInventory, VoucherStatus, VoucherType
from .exceptions import (
    EmptyInventoryError,
    InsufficientStockError,
    VoucherFileError,
    VoucherNotFoundError,
)
from .file_parser import ParsedVoucher, parse_voucher_file

logger = logging.getLogger(__name__)


def fetch_voucher_inventory(*, voucher_type_id: Optional[UUID] = None) -> QuerySet:
    """
    Return inventory rows with their voucher type, optionally for one type.

    Raises:
        EmptyInventoryError: If nothing matches
    """
    queryset = VoucherInventory.objects.select_related('voucher_type')
    if voucher_type_id:
        queryset = queryset.filter(voucher_type_id=voucher_type_id)

    if not queryset.exists():
        raise EmptyInventoryError("No voucher inventory data found")

    return queryset.order_by('created_at')


@transaction.atomic
def upload_vouchers(*, vouchers: Iterable, uploaded_by=None) -> int:
    """
    Insert vouchers as available stock.

    Args:
        vouchers: ParsedVoucher instances or dicts with voucher_type_id,
            amount, pin and optional serial_number / expiry_date
        uploaded_by: Acting admin

    Returns:
        Number of rows inserted
    """
    rows = []
    for voucher in vouchers:
        data = asdict(voucher) if isinstance(voucher, ParsedVoucher) else dict(voucher)
        rows.append(VoucherInventory(
            voucher_type_id=data['voucher_type_id'],
            amount=data['amount'],
            pin=data['pin'],
            serial_number=data.get('serial_number') or '',
            expiry_date=data.get('expiry_date') or None,
            status=VoucherStatus.AVAILABLE,
            uploaded_by=uploaded_by,
        ))

    VoucherInventory.objects.bulk_create(rows, batch_size=500)
    return len(rows)


def process_voucher_file(*, content: str, uploaded_by=None) -> dict:
    """
    Parse an uploaded supplier file and store its vouchers.

    Returns:
        dict with type_name, uploaded, total_lines, valid_lines and errors
        (line errors of a partially valid file)

    Raises:
        VoucherFileError: If no voucher could be read from the file
    """
    result = parse_voucher_file(content, VoucherType.objects.all())

    if not result.vouchers:
        message = result.errors[0] if result.errors else "No vouchers found in file"
        logger.warning("Voucher file rejected: %s", message)
        raise VoucherFileError(message, errors=result.errors)

    uploaded = upload_vouchers(vouchers=result.vouchers, uploaded_by=uploaded_by)

    logger.info(
        "Uploaded %d %s vouchers (%d line errors) by %s",
        uploaded,
        result.type_name,
        len(result.errors),
        getattr(uploaded_by, 'id', None),
    )

    return {
        'type_name': result.type_name,
        'uploaded': uploaded,
        'total_lines': result.total_lines,
        'valid_lines': result.valid_lines,
        'errors': result.errors,
    }


@transaction.atomic
def disable_voucher(*, voucher_id: UUID) -> VoucherInventory:
    """
    Take a voucher out of sale.

    Raises:
        VoucherNotFoundError: If the voucher does not exist
    """
    try:
        voucher = VoucherInventory.objects.select_for_update().get(id=voucher_id)
    except VoucherInventory.DoesNotExist:
        raise VoucherNotFoundError(f"Voucher not found: {voucher_id}")

    voucher.status = VoucherStatus.DISABLED
    voucher.save(update_fields=['status', 'updated_at'])
    return voucher


def reserve_available_vouchers(*, voucher_type_id: UUID, amount, quantity: int = 1) -> List[VoucherInventory]:
    """
    Lock the oldest available vouchers of a type and face value.

    Must run inside a transaction; the caller marks them sold.

    Raises:
        InsufficientStockError: If fewer than quantity are available
    """
    vouchers = list(
        VoucherInventory.objects
        .select_for_update()
        .filter(
            voucher_type_id=voucher_type_id,
            amount=amount,
            status=VoucherStatus.AVAILABLE,
        )
        .order_by('created_at', 'id')[:quantity]
    )

    if len(vouchers) < quantity:
        raise InsufficientStockError(
            f"Only {len(vouchers)} voucher(s) of R {amount} available, {quantity} requested"
        )

    return vouchers
