from django.conf import settings
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import api_view, permission_classes, renderer_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema

from apps.accounts.models import PermissionKey, User
from apps.accounts.permissions import HasAdminPermission, IsRetailerRole, IsTerminalRole
from apps.retailers.services import TerminalNotFoundError, fetch_my_terminal
from apps.vouchers.services import InsufficientStockError

from .models import Sale
from .renderers import CSVExportRenderer, XLSXExportRenderer
from .serializers import (
    SaleCreateSerializer,
    SaleSerializer,
    DateRangeQuerySerializer,
    ExportFormatQuerySerializer,
    DashboardQuerySerializer,
    SalesReportRowSerializer,
    EarningsSummarySerializer,
    InventoryReportSerializer,
    DashboardSerializer,
)
from .services import (
    record_sale,
    fetch_sales_report,
    fetch_earnings_summary,
    fetch_inventory_report,
    fetch_dashboard,
    export_sales_report_csv,
    export_sales_report_xlsx,
    # Exceptions
    SaleNotAllowedError,
    InsufficientBalanceError,
)

ViewReports = HasAdminPermission(PermissionKey.VIEW_REPORTS)
ViewDashboard = HasAdminPermission(PermissionKey.VIEW_DASHBOARD)


class SalePagination(PageNumberPagination):
    page_size = settings.DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = 200


class SaleViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Voucher sales.

    list: Own sales of the signed-in terminal, or of every terminal of the
          signed-in retailer
    create: Sell vouchers from the signed-in terminal
    """

    serializer_class = SaleSerializer
    pagination_class = SalePagination

    def get_permissions(self):
        if self.action == 'create':
            return [IsTerminalRole()]
        return [(IsTerminalRole | IsRetailerRole)()]

    def get_queryset(self):
        user = self.request.user
        queryset = Sale.objects.select_related('terminal', 'voucher_inventory__voucher_type')
        if user.role == User.Role.TERMINAL:
            return queryset.filter(terminal__user=user)
        return queryset.filter(terminal__retailer__user=user)

    @extend_schema(request=SaleCreateSerializer, responses={201: SaleSerializer(many=True)}, tags=['sales'])
    def create(self, request):
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            terminal = fetch_my_terminal(request.user)
        except TerminalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        try:
            sales = record_sale(
                terminal=terminal,
                voucher_type_id=data['voucher_type_id'].id,
                amount=data['amount'],
                quantity=data['quantity'],
            )
        except (SaleNotAllowedError, InsufficientStockError, InsufficientBalanceError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        sales = (
            Sale.objects
            .filter(id__in=[sale.id for sale in sales])
            .select_related('terminal', 'voucher_inventory__voucher_type')
            .order_by('created_at')
        )
        return Response(SaleSerializer(sales, many=True).data, status=status.HTTP_201_CREATED)


def _date_range(request):
    query = DateRangeQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data.get('start_date'), query.validated_data.get('end_date')


@extend_schema(
    parameters=[DateRangeQuerySerializer],
    responses={200: SalesReportRowSerializer(many=True)},
    description="Sales between two dates; bulk sales are grouped into one row.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([ViewReports])
def sales_report(request):
    start_date, end_date = _date_range(request)
    rows = fetch_sales_report(start_date=start_date, end_date=end_date)
    return Response(SalesReportRowSerializer(rows, many=True).data)


@extend_schema(
    parameters=[DateRangeQuerySerializer, ExportFormatQuerySerializer],
    responses={
        (200, 'text/csv'): OpenApiTypes.STR,
        (200, XLSXExportRenderer.media_type): OpenApiTypes.BINARY,
    },
    description="Sales report as CSV (default) or Excel with ?format=xlsx, with a TOTAL row.",
    tags=['reports'],
)
@api_view(['GET'])
@renderer_classes([CSVExportRenderer, XLSXExportRenderer])
@permission_classes([ViewReports])
def export_sales_report(request):
    start_date, end_date = _date_range(request)
    rows = fetch_sales_report(start_date=start_date, end_date=end_date)
    if request.accepted_renderer.format == 'xlsx':
        filename, content = export_sales_report_xlsx(rows, start_date, end_date)
    else:
        filename, content = export_sales_report_csv(rows, start_date, end_date)

    response = Response(content)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@extend_schema(
    parameters=[DateRangeQuerySerializer],
    responses={200: EarningsSummarySerializer(many=True)},
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([ViewReports])
def earnings_summary(request):
    start_date, end_date = _date_range(request)
    rows = fetch_earnings_summary(start_date=start_date, end_date=end_date)
    return Response(EarningsSummarySerializer(rows, many=True).data)


@extend_schema(responses={200: InventoryReportSerializer(many=True)}, tags=['reports'])
@api_view(['GET'])
@permission_classes([ViewReports])
def inventory_report(request):
    return Response(InventoryReportSerializer(fetch_inventory_report(), many=True).data)


@extend_schema(
    parameters=[DashboardQuerySerializer],
    responses={200: DashboardSerializer},
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([ViewDashboard])
def dashboard(request):
    """Retailer counts and sales totals for today and the last 30 days."""
    query = DashboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    data = fetch_dashboard(today=query.validated_data.get('date'))
    return Response(DashboardSerializer(data).data)
