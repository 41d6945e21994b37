"""
Voucher file parser.

Supplier files come in two shapes:

* pipe-delimited batches where every data row starts with ``D|`` and the
  product code in the second column identifies the voucher type, e.g.::

      D|RINGA0100|100.00|0|100.00|01/06/2026|127465|RT09C1044798F43|2691290788475827

* comma-delimited Easyload exports::

      Easyload,5,25357070837651,00100050000096969531,20270822

A file holds vouchers of exactly one type. The type is detected from the
first line that matches any known format, testing formats in the order of
``VOUCHER_FILE_FORMATS``. Line errors are collected and never abort the
batch.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class VoucherFileFormat:
    """How to recognise and read one supplier format."""

    type_name: str
    marker: str
    delimiter: str = '|'
    min_columns: int = 9
    pin_before_serial: bool = False

    @property
    def is_pipe(self) -> bool:
        return self.delimiter == '|'

    def matches(self, line: str) -> bool:
        if self.is_pipe:
            return line.startswith('D|') and self.marker in line
        return line.startswith(self.marker)


# Order matters: a line is claimed by the first format that matches it.
VOUCHER_FILE_FORMATS = (
    VoucherFileFormat('Ringa', 'RINGA'),
    VoucherFileFormat('Hollywoodbets', 'HWB'),
    VoucherFileFormat('Easyload', 'Easyload', delimiter=',', min_columns=5),
    VoucherFileFormat('Vodacom Daily Data', 'VDD'),
    VoucherFileFormat('Vodacom Weekly Data', 'VDW'),
    VoucherFileFormat('Vodacom Monthly Data', 'VDM'),
    VoucherFileFormat('Telkom Daily Data', 'TD'),
    VoucherFileFormat('Telkom Weekly Data', 'TW'),
    VoucherFileFormat('Telkom Monthly Data', 'TM'),
    VoucherFileFormat('MTN Daily Data', 'MTNID'),
    VoucherFileFormat('MTN Weekly Data', 'MTNIW'),
    VoucherFileFormat('MTN Monthly Data', 'MTNIM'),
    VoucherFileFormat('CellC Weekly Data', 'CELCW'),
    VoucherFileFormat('CellC Daily Data', 'CELCD'),
    VoucherFileFormat('CellC Monthly Data', 'CELCM'),
    VoucherFileFormat('CellC Airtime', 'CELLC'),
    VoucherFileFormat('Unipin', 'UPN', pin_before_serial=True),
)

UNKNOWN_FORMAT_MESSAGE = (
    "Unknown file format. Expected Ringa, Hollywoodbets, Easyload, Vodacom Data, "
    "Telkom Data, MTN Data, CellC (Airtime, Daily Data, Weekly Data, Monthly Data), "
    "or Unipin format."
)

CENT = Decimal('0.01')
MAX_AMOUNT = Decimal('100000000')
MAX_CODE_LENGTH = 64


@dataclass
class ParsedVoucher:
    voucher_type_id: object
    amount: Decimal
    pin: str
    serial_number: str = ''
    expiry_date: Optional[str] = None


@dataclass
class ParseResult:
    vouchers: List[ParsedVoucher] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    total_lines: int = 0
    valid_lines: int = 0
    type_name: Optional[str] = None


class LineError(ValueError):
    """A single data line could not be read."""


def _split_lines(content: str) -> List[str]:
    return [
        line.rstrip('\r')
        for line in content.split('\n')
        if line.strip()
    ]


def detect_format(lines: Iterable[str]) -> Optional[VoucherFileFormat]:
    """Return the format of the first line any known format claims."""
    for line in lines:
        for fmt in VOUCHER_FILE_FORMATS:
            if fmt.matches(line):
                return fmt
    return None


def get_voucher_type_name_from_file(content: str) -> Optional[str]:
    """Return the voucher type name a file would be imported as, or None."""
    fmt = detect_format(_split_lines(content))
    return fmt.type_name if fmt else None


def _parse_amount(raw: str) -> Decimal:
    try:
        amount = Decimal(raw.strip())
        if not amount.is_finite():
            raise LineError("Invalid amount")
        amount = amount.quantize(CENT)
    except InvalidOperation:
        raise LineError("Invalid amount")
    # VoucherInventory.amount holds at most 8 integer digits
    if amount.copy_abs() >= MAX_AMOUNT:
        raise LineError("Invalid amount")
    return amount


def _text_column(raw: str, label: str) -> str:
    value = raw.strip()
    if len(value) > MAX_CODE_LENGTH:
        raise LineError(f"{label} is longer than {MAX_CODE_LENGTH} characters")
    return value


def _iso_date(year: str, month: str, day: str) -> str:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        raise LineError("Invalid expiry date")


def _parse_pipe_line(fmt: VoucherFileFormat, columns: List[str]) -> dict:
    amount = _parse_amount(columns[2])

    parts = columns[5].strip().split('/')
    if len(parts) != 3:
        raise LineError("Invalid expiry date")
    day, month, year = parts

    if fmt.pin_before_serial:
        pin, serial = columns[-2], columns[-1]
    else:
        serial, pin = columns[-2], columns[-1]

    return {
        'amount': amount,
        'pin': _text_column(pin, 'PIN'),
        'serial_number': _text_column(serial, 'Serial number'),
        'expiry_date': _iso_date(year, month, day),
    }


def _parse_comma_line(columns: List[str]) -> dict:
    amount = _parse_amount(columns[1])

    raw_expiry = columns[4].strip()
    if len(raw_expiry) != 8 or not raw_expiry.isdigit():
        raise LineError("Invalid expiry date")

    return {
        'amount': amount,
        'pin': _text_column(columns[2], 'PIN'),
        'serial_number': _text_column(columns[3], 'Serial number'),
        'expiry_date': _iso_date(raw_expiry[:4], raw_expiry[4:6], raw_expiry[6:8]),
    }


def parse_voucher_file(content: str, voucher_types: Iterable) -> ParseResult:
    """
    Parse a supplier voucher file.

    Args:
        content: Full text of the uploaded file
        voucher_types: Known voucher types; anything with ``id`` and ``name``

    Returns:
        ParseResult. ``total_lines`` counts non-blank lines, error line
        numbers are 1-based over those lines.
    """
    lines = _split_lines(content)
    result = ParseResult(total_lines=len(lines))

    if not lines:
        result.errors.append('File is empty')
        return result

    fmt = detect_format(lines)
    if fmt is None:
        result.errors.append(UNKNOWN_FORMAT_MESSAGE)
        return result
    result.type_name = fmt.type_name

    voucher_type = next(
        (vt for vt in voucher_types if vt.name.lower() == fmt.type_name.lower()),
        None,
    )
    if voucher_type is None:
        result.errors.append(f"{fmt.type_name} voucher type not found in database")
        return result

    for number, line in enumerate(lines, start=1):
        if not fmt.matches(line):
            # headers and trailers
            continue

        columns = line.split(fmt.delimiter)
        if len(columns) < fmt.min_columns:
            result.errors.append(f"Line {number}: Insufficient columns")
            continue

        try:
            if fmt.is_pipe:
                fields = _parse_pipe_line(fmt, columns)
            else:
                fields = _parse_comma_line(columns)
        except LineError as e:
            result.errors.append(f"Line {number}: {e}")
            continue

        result.vouchers.append(ParsedVoucher(voucher_type_id=voucher_type.id, **fields))
        result.valid_lines += 1

    return result
