"""Tests for the supplier voucher file parser."""

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from apps.vouchers.services.file_parser import (
    UNKNOWN_FORMAT_MESSAGE,
    get_voucher_type_name_from_file,
    parse_voucher_file,
)

RINGA_LINE = 'D|RINGA0100|100.00|0|100.00|01/06/2026|127465|RT09C1044798F43|2691290788475827'
EASYLOAD_LINE = 'Easyload,5,25357070837651,00100050000096969531,20270822'
UNIPIN_LINE = 'D|UPN0050|50.00|0|50.00|15/03/2027|998877|7766554433221100|UPSERIAL0001'


def voucher_type(name):
    return SimpleNamespace(id=uuid4(), name=name)


@pytest.fixture
def known_types():
    return [
        voucher_type('Ringa'),
        voucher_type('easyload'),
        voucher_type('Unipin'),
        voucher_type('Vodacom Daily Data'),
    ]


class TestFormatDetection:

    @pytest.mark.parametrize('line, expected', [
        (RINGA_LINE, 'Ringa'),
        (EASYLOAD_LINE, 'Easyload'),
        (UNIPIN_LINE, 'Unipin'),
        ('D|VDD0010|10.00|0|10.00|01/01/2027|1|SER1|PIN1', 'Vodacom Daily Data'),
        ('D|MTNIW0030|30.00|0|30.00|01/01/2027|1|SER1|PIN1', 'MTN Weekly Data'),
        ('D|CELLC0012|12.00|0|12.00|01/01/2027|1|SER1|PIN1', 'CellC Airtime'),
    ])
    def test_detects_type(self, line, expected):
        assert get_voucher_type_name_from_file(line) == expected

    def test_header_lines_are_skipped_for_detection(self):
        content = 'H|BATCH|20260101\n' + RINGA_LINE + '\nT|1\n'
        assert get_voucher_type_name_from_file(content) == 'Ringa'

    def test_unknown_format(self, known_types):
        result = parse_voucher_file('hello,world\n', known_types)

        assert get_voucher_type_name_from_file('hello,world') is None
        assert result.errors == [UNKNOWN_FORMAT_MESSAGE]
        assert result.vouchers == []


class TestParsing:

    def test_pipe_line(self, known_types):
        result = parse_voucher_file(RINGA_LINE, known_types)

        assert result.type_name == 'Ringa'
        assert result.valid_lines == 1
        voucher = result.vouchers[0]
        assert voucher.voucher_type_id == known_types[0].id
        assert voucher.amount == Decimal('100.00')
        assert voucher.serial_number == 'RT09C1044798F43'
        assert voucher.pin == '2691290788475827'
        assert voucher.expiry_date == '2026-06-01'

    def test_comma_line(self, known_types):
        result = parse_voucher_file(EASYLOAD_LINE, known_types)

        voucher = result.vouchers[0]
        # type names match case-insensitively
        assert voucher.voucher_type_id == known_types[1].id
        assert voucher.amount == Decimal('5.00')
        assert voucher.pin == '25357070837651'
        assert voucher.serial_number == '00100050000096969531'
        assert voucher.expiry_date == '2027-08-22'

    def test_unipin_pin_comes_before_serial(self, known_types):
        voucher = parse_voucher_file(UNIPIN_LINE, known_types).vouchers[0]

        assert voucher.pin == '7766554433221100'
        assert voucher.serial_number == 'UPSERIAL0001'

    def test_windows_line_endings_and_blank_lines(self, known_types):
        content = f'{RINGA_LINE}\r\n\r\n{RINGA_LINE}\r\n'
        result = parse_voucher_file(content, known_types)

        assert result.total_lines == 2
        assert result.valid_lines == 2

    def test_line_errors_do_not_abort_batch(self, known_types):
        content = '\n'.join([
            RINGA_LINE,
            'D|RINGA0100|abc|0|100.00|01/06/2026|1|SER|PIN',
            'D|RINGA0100|100.00|0|100.00|31/02/2026|1|SER|PIN',
            'D|RINGA0100|100.00',
            RINGA_LINE,
        ])
        result = parse_voucher_file(content, known_types)

        assert result.valid_lines == 2
        assert result.errors == [
            'Line 2: Invalid amount',
            'Line 3: Invalid expiry date',
            'Line 4: Insufficient columns',
        ]

    @pytest.mark.parametrize('amount', ['1e30', '100000000', '-123456789.00', 'NaN', 'Infinity'])
    def test_out_of_range_amount_is_a_line_error(self, known_types, amount):
        content = f'D|RINGA0100|{amount}|0|100.00|01/06/2026|1|SER|PIN\n{RINGA_LINE}'
        result = parse_voucher_file(content, known_types)

        assert result.errors == ['Line 1: Invalid amount']
        assert result.valid_lines == 1

    def test_largest_storable_amount(self, known_types):
        result = parse_voucher_file('D|RINGA0100|99999999.99|0|1|01/06/2026|1|SER|PIN', known_types)

        assert result.vouchers[0].amount == Decimal('99999999.99')

    def test_overlong_pin(self, known_types):
        content = f'D|RINGA0100|100.00|0|100.00|01/06/2026|1|SER|{"9" * 65}\n{RINGA_LINE}'
        result = parse_voucher_file(content, known_types)

        assert result.errors == ['Line 1: PIN is longer than 64 characters']
        assert result.valid_lines == 1

    def test_overlong_easyload_serial(self, known_types):
        result = parse_voucher_file(f'Easyload,5,123,{"1" * 65},20270822', known_types)

        assert result.errors == ['Line 1: Serial number is longer than 64 characters']

    def test_bad_easyload_expiry(self, known_types):
        result = parse_voucher_file('Easyload,5,123,456,2027-08', known_types)

        assert result.errors == ['Line 1: Invalid expiry date']

    def test_empty_file(self, known_types):
        result = parse_voucher_file('\n\n', known_types)

        assert result.errors == ['File is empty']
        assert result.total_lines == 0

    def test_type_missing_from_database(self):
        result = parse_voucher_file(RINGA_LINE, [voucher_type('Easyload')])

        assert result.type_name == 'Ringa'
        assert result.errors == ['Ringa voucher type not found in database']
