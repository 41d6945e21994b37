import io

import openpyxl
import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.accounts.models import PermissionKey


@pytest.fixture
def reports_client(admin_client, admin_user, grant):
    grant(admin_user, PermissionKey.VIEW_REPORTS)
    return admin_client


@pytest.fixture
def sale_stock(voucher_type, make_vouchers):
    return make_vouchers(voucher_type, '10.00', count=3)


@pytest.mark.django_db
class TestSaleAPI:
    """Tests for /api/sales/"""

    def test_sell(self, terminal_client, voucher_type, sale_stock):
        response = terminal_client.post(reverse('sales:sale-list'), {
            'voucher_type_id': str(voucher_type.id),
            'amount': '10.00',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data) == 1
        sale = response.data[0]
        assert sale['pin'] == sale_stock[0].pin
        assert sale['voucher_type'] == 'Ringa'
        assert sale['sale_amount'] == '10.00'
        assert sale['terminal_name'] == 'Till 1'
        assert sale['batch_id'] is None

    def test_sell_several(self, terminal_client, voucher_type, sale_stock):
        response = terminal_client.post(reverse('sales:sale-list'), {
            'voucher_type_id': str(voucher_type.id),
            'amount': '10.00',
            'quantity': 2,
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data) == 2
        assert response.data[0]['batch_id'] == response.data[1]['batch_id']

    def test_out_of_stock(self, terminal_client, voucher_type, sale_stock):
        response = terminal_client.post(reverse('sales:sale-list'), {
            'voucher_type_id': str(voucher_type.id),
            'amount': '10.00',
            'quantity': 4,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'available' in response.data['error']

    def test_unknown_voucher_type(self, terminal_client):
        response = terminal_client.post(reverse('sales:sale-list'), {
            'voucher_type_id': '00000000-0000-0000-0000-000000000000',
            'amount': '10.00',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_only_terminals_sell(self, retailer_client, voucher_type, sale_stock):
        response = retailer_client.post(reverse('sales:sale-list'), {
            'voucher_type_id': str(voucher_type.id),
            'amount': '10.00',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_for_terminal_and_retailer(self, terminal_client, retailer_client, voucher_type, sale_stock):
        terminal_client.post(reverse('sales:sale-list'), {
            'voucher_type_id': str(voucher_type.id),
            'amount': '10.00',
        })

        for client in (terminal_client, retailer_client):
            response = client.get(reverse('sales:sale-list'))
            assert response.status_code == status.HTTP_200_OK
            assert response.data['count'] == 1

    def test_list_forbidden_for_admins(self, admin_client):
        response = admin_client.get(reverse('sales:sale-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.fixture
def sold(terminal_client, voucher_type, sale_stock):
    terminal_client.post(reverse('sales:sale-list'), {
        'voucher_type_id': str(voucher_type.id),
        'amount': '10.00',
        'quantity': 2,
    })


@pytest.mark.django_db
class TestReportsAPI:
    """Tests for /api/reports/"""

    @pytest.mark.parametrize('name', [
        'sales:sales-report',
        'sales:sales-report-export',
        'sales:earnings-summary',
        'sales:inventory-report',
    ])
    def test_require_view_reports(self, admin_client, name):
        response = admin_client.get(reverse(name))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_sales_report(self, reports_client, sold):
        response = reports_client.get(reverse('sales:sales-report'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['quantity'] == 2
        assert response.data[0]['amount'] == '20.00'

    def test_invalid_range(self, reports_client):
        response = reports_client.get(reverse('sales:sales-report'), {
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'end_date' in response.data

    def test_export(self, reports_client, sold):
        response = reports_client.get(reverse('sales:sales-report-export'), {
            'start_date': '2025-01-01',
            'end_date': '2025-01-31',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert response['Content-Disposition'] == (
            'attachment; filename="arv-sales-report-2025-01-01-to-2025-01-31.csv"'
        )
        lines = response.content.decode().splitlines()
        assert lines[0].startswith('"Date","Retailer"')
        assert lines[-1].startswith('"TOTAL"')

    def test_export_xlsx(self, reports_client, sold):
        response = reports_client.get(reverse('sales:sales-report-export'), {
            'start_date': '2025-01-01',
            'format': 'xlsx',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == (
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        assert response['Content-Disposition'] == (
            'attachment; filename="arv-sales-report-from-2025-01-01.xlsx"'
        )
        sheet = openpyxl.load_workbook(io.BytesIO(response.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert rows[0][0] == 'Date'
        assert rows[-1][0] == 'TOTAL'

    def test_export_unknown_format(self, reports_client):
        response = reports_client.get(reverse('sales:sales-report-export'), {'format': 'pdf'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_export_errors_are_json(self, reports_client):
        response = reports_client.get(reverse('sales:sales-report-export'), {
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
            'format': 'xlsx',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response['Content-Type'] == 'application/json'
        assert 'end_date' in response.json()

    def test_earnings(self, reports_client, sold):
        response = reports_client.get(reverse('sales:earnings-summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['total_sales'] == 2
        assert response.data[0]['platform_commission'] == '1.00'

    def test_inventory(self, reports_client, sold):
        response = reports_client.get(reverse('sales:inventory-report'))

        assert response.data[0]['available'] == 1
        assert response.data[0]['sold'] == 2


@pytest.mark.django_db
class TestDashboardAPI:
    """Tests for /api/reports/dashboard/"""

    def test_requires_permission(self, admin_client):
        response = admin_client.get(reverse('sales:dashboard'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_dashboard(self, admin_client, admin_user, grant, sold):
        grant(admin_user, PermissionKey.VIEW_DASHBOARD)

        response = admin_client.get(reverse('sales:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['date'] == str(timezone.localdate())
        assert response.data['retailers'] == {'total': 1, 'active': 1}
        assert response.data['today']['sales_count'] == 2
        assert response.data['today']['sales_amount'] == '20.00'
