from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.models import PermissionKey
from apps.accounts.permissions import IsAdminRole, HasAdminPermission

from .models import DepositMethod
from .serializers import (
    DepositFeeConfigurationSerializer,
    DepositFeeUpdateSerializer,
    RetailerDepositSerializer,
    DepositCreateSerializer,
    FeePreviewRequestSerializer,
    FeePreviewSerializer,
    CreditLimitAdjustmentSerializer,
    CreditAdjustmentCreateSerializer,
)
from .services import (
    calculate_deposit_fee,
    fetch_deposit_fee_configurations,
    fetch_deposit_fee_configuration,
    update_deposit_fee_configuration,
    process_retailer_deposit,
    fetch_retailer_deposit_history,
    process_credit_limit_adjustment,
    fetch_retailer_credit_history,
    # Exceptions
    RetailerNotFoundError,
    FeeConfigurationNotFoundError,
    InvalidDepositError,
    InvalidCreditAdjustmentError,
)

ManageSettings = HasAdminPermission(PermissionKey.MANAGE_SETTINGS)
ManageDeposits = HasAdminPermission(PermissionKey.MANAGE_DEPOSITS)
ManageCreditLimits = HasAdminPermission(PermissionKey.MANAGE_CREDIT_LIMITS)
ViewFinancialData = HasAdminPermission(PermissionKey.VIEW_FINANCIAL_DATA)

RETAILER_PARAMETER = OpenApiParameter('retailer', str, required=True, description='Retailer id')


class DepositFeeViewSet(viewsets.ViewSet):
    """
    Deposit fee configuration.

    list: Fee per deposit method
    partial_update: Change fee type and value of one method
    """

    lookup_field = 'deposit_method'
    lookup_value_regex = '|'.join(DepositMethod.values)

    def get_permissions(self):
        if self.action == 'list':
            return [IsAdminRole()]
        return [ManageSettings()]

    @extend_schema(responses={200: DepositFeeConfigurationSerializer(many=True)}, tags=['finance'])
    def list(self, request):
        configs = fetch_deposit_fee_configurations()
        return Response(DepositFeeConfigurationSerializer(configs, many=True).data)

    @extend_schema(
        request=DepositFeeUpdateSerializer,
        responses={200: DepositFeeConfigurationSerializer},
        tags=['finance'],
    )
    def partial_update(self, request, deposit_method=None):
        serializer = DepositFeeUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            config = update_deposit_fee_configuration(
                deposit_method=deposit_method, **serializer.validated_data
            )
        except FeeConfigurationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(DepositFeeConfigurationSerializer(config).data)


class DepositViewSet(viewsets.ViewSet):
    """
    Retailer balance deposits.

    list: Deposit history of ?retailer, newest first
    create: Deposit to (or remove from) a retailer balance
    preview: Fee and net amount a deposit would produce
    """

    def get_permissions(self):
        if self.action == 'list':
            return [ViewFinancialData()]
        if self.action == 'preview':
            return [IsAdminRole()]
        return [ManageDeposits()]

    @extend_schema(
        parameters=[RETAILER_PARAMETER],
        responses={200: RetailerDepositSerializer(many=True)},
        tags=['finance'],
    )
    def list(self, request):
        retailer_id = request.query_params.get('retailer')
        if not retailer_id:
            return Response({'error': 'retailer is required'}, status=status.HTTP_400_BAD_REQUEST)

        deposits = fetch_retailer_deposit_history(retailer_id=retailer_id)
        return Response(RetailerDepositSerializer(deposits, many=True).data)

    @extend_schema(
        request=DepositCreateSerializer,
        responses={201: RetailerDepositSerializer},
        tags=['finance'],
    )
    def create(self, request):
        serializer = DepositCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            deposit = process_retailer_deposit(processed_by=request.user, **serializer.validated_data)
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (FeeConfigurationNotFoundError, InvalidDepositError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RetailerDepositSerializer(deposit).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=FeePreviewRequestSerializer,
        responses={200: FeePreviewSerializer},
        tags=['finance'],
    )
    @action(detail=False, methods=['post'])
    def preview(self, request):
        serializer = FeePreviewRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        amount = serializer.validated_data['amount']
        method = serializer.validated_data['deposit_method']

        try:
            config = fetch_deposit_fee_configuration(deposit_method=method)
        except FeeConfigurationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        fee_amount = calculate_deposit_fee(amount, config.fee_type, config.fee_value)
        return Response(FeePreviewSerializer({
            'amount': amount,
            'deposit_method': method,
            'fee_type': config.fee_type,
            'fee_value': config.fee_value,
            'fee_amount': fee_amount,
            'net_amount': amount - fee_amount,
        }).data)


class CreditAdjustmentViewSet(viewsets.ViewSet):
    """
    Retailer credit limits.

    list: Credit limit history of ?retailer, newest first
    create: Increase or decrease a credit limit
    """

    def get_permissions(self):
        if self.action == 'list':
            return [ViewFinancialData()]
        return [ManageCreditLimits()]

    @extend_schema(
        parameters=[RETAILER_PARAMETER],
        responses={200: CreditLimitAdjustmentSerializer(many=True)},
        tags=['finance'],
    )
    def list(self, request):
        retailer_id = request.query_params.get('retailer')
        if not retailer_id:
            return Response({'error': 'retailer is required'}, status=status.HTTP_400_BAD_REQUEST)

        history = fetch_retailer_credit_history(retailer_id=retailer_id)
        return Response(CreditLimitAdjustmentSerializer(history, many=True).data)

    @extend_schema(
        request=CreditAdjustmentCreateSerializer,
        responses={201: CreditLimitAdjustmentSerializer},
        tags=['finance'],
    )
    def create(self, request):
        serializer = CreditAdjustmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            adjustment = process_credit_limit_adjustment(
                processed_by=request.user, **serializer.validated_data
            )
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCreditAdjustmentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CreditLimitAdjustmentSerializer(adjustment).data, status=status.HTTP_201_CREATED)
