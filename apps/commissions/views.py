from django.db import transaction
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.models import PermissionKey
from apps.accounts.permissions import IsAdminRole, HasAdminPermission
from apps.vouchers.models import VoucherType

from .models import CommissionGroup
from .serializers import (
    CommissionGroupSerializer,
    CommissionGroupListSerializer,
    CommissionGroupCreateSerializer,
    CommissionGroupUpdateSerializer,
    RateInputSerializer,
    CommissionGroupRateSerializer,
    VoucherCommissionOverrideSerializer,
    OverrideLookupSerializer,
    OverrideUpsertSerializer,
    CommissionSplitSerializer,
)
from .services import (
    fetch_commission_groups,
    fetch_commission_groups_with_counts,
    fetch_commission_group_by_id,
    create_commission_group,
    update_commission_group,
    archive_commission_group,
    create_commission_rates,
    upsert_commission_rate,
    get_voucher_commission_override,
    upsert_voucher_commission_override,
    get_voucher_commission_overrides_for_type,
    delete_voucher_commission_override,
    get_voucher_amounts_for_type,
    resolve_commission,
    # Exceptions
    CommissionGroupNotFoundError,
    OverrideNotFoundError,
    InvalidCommissionError,
)

ManageCommissionGroups = HasAdminPermission(PermissionKey.MANAGE_COMMISSION_GROUPS)


class CommissionGroupViewSet(viewsets.ViewSet):
    """
    Commission groups.

    list: Groups with retailer/agent counts (?include_inactive=true)
    active: Active groups with their rates
    retrieve: One group with its rates
    create: New group, optionally with its initial rates
    partial_update: Rename, describe or reactivate
    destroy: Archive (soft delete)
    rates: Create or update the rate of one voucher type
    """

    lookup_value_regex = r'[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action in ['list', 'active', 'retrieve']:
            return [IsAdminRole()]
        return [ManageCommissionGroups()]

    @extend_schema(
        parameters=[OpenApiParameter('include_inactive', bool)],
        responses={200: CommissionGroupListSerializer(many=True)},
        tags=['commissions'],
    )
    def list(self, request):
        include_inactive = request.query_params.get('include_inactive', '').lower() in ('1', 'true')
        groups = fetch_commission_groups_with_counts(include_inactive=include_inactive)
        return Response(CommissionGroupListSerializer(groups, many=True).data)

    @extend_schema(responses={200: CommissionGroupSerializer(many=True)}, tags=['commissions'])
    @action(detail=False, methods=['get'])
    def active(self, request):
        return Response(CommissionGroupSerializer(fetch_commission_groups(), many=True).data)

    @extend_schema(responses={200: CommissionGroupSerializer}, tags=['commissions'])
    def retrieve(self, request, pk=None):
        try:
            group = fetch_commission_group_by_id(group_id=pk)
        except CommissionGroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CommissionGroupSerializer(group).data)

    @extend_schema(
        request=CommissionGroupCreateSerializer,
        responses={201: CommissionGroupSerializer},
        tags=['commissions'],
    )
    def create(self, request):
        serializer = CommissionGroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with transaction.atomic():
            group = create_commission_group(name=data['name'], description=data.get('description'))
            rates = data.get('rates') or []
            if rates:
                create_commission_rates(rates=[
                    {
                        'commission_group_id': group.id,
                        'voucher_type_id': rate['voucher_type_id'],
                        'retailer_pct': rate['retailer_pct'],
                        'agent_pct': rate['agent_pct'],
                        'supplier_pct': rate.get('supplier_pct'),
                    }
                    for rate in rates
                ])

        group = fetch_commission_group_by_id(group_id=group.id)
        return Response(CommissionGroupSerializer(group).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=CommissionGroupUpdateSerializer,
        responses={200: CommissionGroupSerializer},
        tags=['commissions'],
    )
    def partial_update(self, request, pk=None):
        serializer = CommissionGroupUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            group = update_commission_group(group_id=pk, **serializer.validated_data)
        except CommissionGroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CommissionGroupSerializer(group).data)

    @extend_schema(responses={204: None}, tags=['commissions'])
    def destroy(self, request, pk=None):
        try:
            archive_commission_group(group_id=pk)
        except CommissionGroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=RateInputSerializer,
        responses={200: CommissionGroupRateSerializer},
        tags=['commissions'],
    )
    @action(detail=True, methods=['put'])
    def rates(self, request, pk=None):
        serializer = RateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            rate = upsert_commission_rate(group_id=pk, enforce_split=True, **serializer.validated_data)
        except CommissionGroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCommissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CommissionGroupRateSerializer(rate).data)


class CommissionOverrideViewSet(viewsets.ViewSet):
    """
    Face value overrides of one voucher type.

    list: Overrides of ?voucher_type for ?group (global ones when group is
          omitted), or the single override of ?amount
    create: Create or replace one override
    remove: Delete the override identified by voucher_type, amount and group
    """

    def get_permissions(self):
        if self.action == 'list':
            return [IsAdminRole()]
        return [ManageCommissionGroups()]

    @extend_schema(
        parameters=[OverrideLookupSerializer],
        responses={200: VoucherCommissionOverrideSerializer(many=True)},
        tags=['commissions'],
    )
    def list(self, request):
        lookup = OverrideLookupSerializer(data=request.query_params)
        lookup.is_valid(raise_exception=True)
        params = lookup.validated_data

        if params.get('amount') is not None:
            override = get_voucher_commission_override(
                voucher_type_id=params['voucher_type'],
                amount=params['amount'],
                group_id=params.get('group'),
            )
            if override is None:
                return Response({'error': 'Commission override not found'}, status=status.HTTP_404_NOT_FOUND)
            return Response(VoucherCommissionOverrideSerializer(override).data)

        overrides = get_voucher_commission_overrides_for_type(
            voucher_type_id=params['voucher_type'], group_id=params.get('group')
        )
        return Response(VoucherCommissionOverrideSerializer(overrides, many=True).data)

    @extend_schema(
        request=OverrideUpsertSerializer,
        responses={200: VoucherCommissionOverrideSerializer},
        tags=['commissions'],
    )
    def create(self, request):
        serializer = OverrideUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            override = upsert_voucher_commission_override(
                voucher_type_id=data['voucher_type'],
                group_id=data.get('group'),
                amount=data['amount'],
                supplier_pct=data['supplier_pct'],
                retailer_pct=data['retailer_pct'],
                agent_pct=data['agent_pct'],
                commission_type=data['commission_type'],
            )
        except InvalidCommissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VoucherCommissionOverrideSerializer(override).data)

    @extend_schema(parameters=[OverrideLookupSerializer], responses={204: None}, tags=['commissions'])
    @action(detail=False, methods=['delete'])
    def remove(self, request):
        lookup = OverrideLookupSerializer(data=request.query_params)
        lookup.is_valid(raise_exception=True)
        params = lookup.validated_data

        if params.get('amount') is None:
            return Response({'error': 'amount is required'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            delete_voucher_commission_override(
                voucher_type_id=params['voucher_type'],
                amount=params['amount'],
                group_id=params.get('group'),
            )
        except OverrideNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['commissions'])
@api_view(['GET'])
@permission_classes([IsAdminRole])
def voucher_amounts(request, voucher_type_id):
    """Distinct face values stocked for a voucher type."""
    amounts = get_voucher_amounts_for_type(voucher_type_id=voucher_type_id)
    return Response({'voucher_type': voucher_type_id, 'amounts': [str(a) for a in amounts]})


@extend_schema(
    parameters=[OverrideLookupSerializer],
    responses={200: CommissionSplitSerializer},
    description="Commission split a sale of ?amount would produce for ?voucher_type and ?group.",
    tags=['commissions'],
)
@api_view(['GET'])
@permission_classes([IsAdminRole])
def preview_commission(request):
    lookup = OverrideLookupSerializer(data=request.query_params)
    lookup.is_valid(raise_exception=True)
    params = lookup.validated_data

    if params.get('amount') is None:
        return Response({'error': 'amount is required'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        voucher_type = VoucherType.objects.get(id=params['voucher_type'])
    except VoucherType.DoesNotExist:
        return Response({'error': 'Voucher type not found'}, status=status.HTTP_404_NOT_FOUND)

    group = None
    if params.get('group'):
        group = CommissionGroup.objects.filter(id=params['group']).first()
        if group is None:
            return Response({'error': 'Commission group not found'}, status=status.HTTP_404_NOT_FOUND)

    split = resolve_commission(voucher_type=voucher_type, amount=params['amount'], commission_group=group)
    return Response(CommissionSplitSerializer(split).data)
