from django.conf import settings
from rest_framework import status, viewsets, mixins
from rest_framework.decorators import action, api_view, permission_classes, parser_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.models import PermissionKey
from apps.accounts.permissions import IsAdminRole, HasAdminPermission

from .models import VoucherType, NetworkProvider, VoucherCategory, DataDuration
from .serializers import (
    VoucherTypeSerializer,
    SupplierCommissionSerializer,
    VoucherTypeFilterSerializer,
    VoucherInventorySerializer,
    VoucherUploadItemSerializer,
    VoucherFileUploadSerializer,
    VoucherFileUploadResultSerializer,
    VoucherTypeSummarySerializer,
    CategoryStatsSerializer,
)
from .services import (
    update_supplier_commission,
    fetch_voucher_types,
    fetch_voucher_inventory,
    upload_vouchers,
    process_voucher_file,
    disable_voucher,
    parse_voucher_file,
    fetch_voucher_type_summaries,
    fetch_network_voucher_summaries,
    fetch_network_category_stats,
    fetch_network_category_duration_stats,
    # Exceptions
    VoucherTypeNotFoundError,
    VoucherNotFoundError,
    EmptyInventoryError,
    VoucherFileError,
)

ManageVouchers = HasAdminPermission(PermissionKey.MANAGE_VOUCHERS)


class VoucherInventoryPagination(PageNumberPagination):
    """Custom pagination for voucher inventory."""
    page_size = settings.DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = 500


class VoucherTypeViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Voucher type catalogue.

    list: Active types; filter with include_inactive, network_provider,
          category and sub_category
    retrieve: One type, including inactive ones
    create / partial_update: Manage types (manage_vouchers)
    supplier_commission: Change the supplier commission percentage
    """

    queryset = VoucherType.objects.all()
    serializer_class = VoucherTypeSerializer
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [IsAdminRole()]
        return [ManageVouchers()]

    @extend_schema(parameters=[VoucherTypeFilterSerializer], tags=['vouchers'])
    def list(self, request, *args, **kwargs):
        filters = VoucherTypeFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        voucher_types = fetch_voucher_types(**filters.validated_data)
        return Response(VoucherTypeSerializer(voucher_types, many=True).data)

    @extend_schema(request=SupplierCommissionSerializer, responses={200: VoucherTypeSerializer}, tags=['vouchers'])
    @action(detail=True, methods=['patch'], url_path='supplier-commission')
    def supplier_commission(self, request, pk=None):
        serializer = SupplierCommissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            voucher_type = update_supplier_commission(
                voucher_type_id=pk,
                supplier_commission_pct=serializer.validated_data['supplier_commission_pct'],
            )
        except VoucherTypeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(VoucherTypeSerializer(voucher_type).data)


class VoucherInventoryViewSet(viewsets.ViewSet):
    """
    Voucher inventory.

    list: Inventory rows (optionally ?voucher_type=<id>), oldest first
    create: Bulk insert vouchers as available stock
    disable: Take one voucher out of sale
    """

    lookup_value_regex = r'[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action == 'list':
            return [IsAdminRole()]
        return [ManageVouchers()]

    @extend_schema(
        parameters=[OpenApiParameter('voucher_type', str, description='Voucher type id')],
        responses={200: VoucherInventorySerializer(many=True)},
        tags=['vouchers'],
    )
    def list(self, request):
        try:
            queryset = fetch_voucher_inventory(voucher_type_id=request.query_params.get('voucher_type'))
        except EmptyInventoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        paginator = VoucherInventoryPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(VoucherInventorySerializer(page, many=True).data)

    @extend_schema(request=VoucherUploadItemSerializer(many=True), tags=['vouchers'])
    def create(self, request):
        serializer = VoucherUploadItemSerializer(data=request.data, many=True)
        serializer.is_valid(raise_exception=True)

        count = upload_vouchers(vouchers=serializer.validated_data, uploaded_by=request.user)
        return Response({'count': count}, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: VoucherInventorySerializer}, tags=['vouchers'])
    @action(detail=True, methods=['post'])
    def disable(self, request, pk=None):
        try:
            voucher = disable_voucher(voucher_id=pk)
        except VoucherNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(VoucherInventorySerializer(voucher).data)


def _read_upload(serializer):
    """Return the uploaded file as text, or an error Response."""
    upload = serializer.validated_data['file']
    if upload.size > settings.VOUCHER_UPLOAD_MAX_BYTES:
        return None, Response(
            {'error': f'File exceeds {settings.VOUCHER_UPLOAD_MAX_BYTES} bytes'},
            status=status.HTTP_400_BAD_REQUEST
        )
    try:
        return upload.read().decode('utf-8-sig'), None
    except UnicodeDecodeError:
        return None, Response(
            {'error': 'File is not valid UTF-8 text'},
            status=status.HTTP_400_BAD_REQUEST
        )


@extend_schema(
    request=VoucherFileUploadSerializer,
    responses={201: VoucherFileUploadResultSerializer},
    description="Upload a supplier voucher file. The voucher type is detected from the file.",
    tags=['vouchers'],
)
@api_view(['POST'])
@permission_classes([ManageVouchers])
@parser_classes([MultiPartParser, FormParser])
def upload_voucher_file(request):
    """Parse and import a supplier voucher file."""
    serializer = VoucherFileUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    content, error_response = _read_upload(serializer)
    if error_response:
        return error_response

    try:
        result = process_voucher_file(content=content, uploaded_by=request.user)
    except VoucherFileError as e:
        return Response(
            {'error': str(e), 'errors': e.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response(result, status=status.HTTP_201_CREATED)


@extend_schema(
    request=VoucherFileUploadSerializer,
    responses={200: VoucherFileUploadResultSerializer},
    description="Parse a voucher file without importing it.",
    tags=['vouchers'],
)
@api_view(['POST'])
@permission_classes([ManageVouchers])
@parser_classes([MultiPartParser, FormParser])
def preview_voucher_file(request):
    """Dry run of the upload: detected type, line counts and errors."""
    serializer = VoucherFileUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    content, error_response = _read_upload(serializer)
    if error_response:
        return error_response

    result = parse_voucher_file(content, VoucherType.objects.all())
    return Response({
        'type_name': result.type_name,
        'uploaded': 0,
        'total_lines': result.total_lines,
        'valid_lines': result.valid_lines,
        'errors': result.errors,
    })


@extend_schema(responses={200: VoucherTypeSummarySerializer(many=True)}, tags=['vouchers'])
@api_view(['GET'])
@permission_classes([IsAdminRole])
def voucher_type_summaries(request):
    """Stock overview per voucher type."""
    return Response(VoucherTypeSummarySerializer(fetch_voucher_type_summaries(), many=True).data)


@extend_schema(tags=['vouchers'])
@api_view(['GET'])
@permission_classes([IsAdminRole])
def network_voucher_summaries(request):
    """Stock overview grouped by network provider."""
    return Response(fetch_network_voucher_summaries())


@extend_schema(responses={200: CategoryStatsSerializer}, tags=['vouchers'])
@api_view(['GET'])
@permission_classes([IsAdminRole])
def network_category_stats(request, provider, category, duration=None):
    """Totals for a provider/category, optionally narrowed to one duration."""
    if provider not in NetworkProvider.values or category not in VoucherCategory.values:
        return Response({'error': 'Unknown network or category'}, status=status.HTTP_404_NOT_FOUND)

    if duration is None:
        stats = fetch_network_category_stats(network_provider=provider, category=category)
    else:
        if duration not in DataDuration.values:
            return Response({'error': 'Unknown duration'}, status=status.HTTP_404_NOT_FOUND)
        stats = fetch_network_category_duration_stats(
            network_provider=provider, category=category, sub_category=duration
        )

    return Response(CategoryStatsSerializer(stats).data)
