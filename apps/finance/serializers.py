from decimal import Decimal

from rest_framework import serializers

from .models import (
    CreditAdjustmentType,
    CreditLimitAdjustment,
    DepositAdjustmentType,
    DepositFeeConfiguration,
    DepositMethod,
    FeeType,
    RetailerDeposit,
)


class DepositFeeConfigurationSerializer(serializers.ModelSerializer):
    class Meta:
        model = DepositFeeConfiguration
        fields = ['id', 'deposit_method', 'fee_type', 'fee_value', 'is_active', 'created_at', 'updated_at']
        read_only_fields = fields


class DepositFeeUpdateSerializer(serializers.Serializer):
    fee_type = serializers.ChoiceField(choices=FeeType.choices)
    fee_value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)

    def validate(self, attrs):
        if attrs['fee_type'] == FeeType.PERCENTAGE and attrs['fee_value'] > 100:
            raise serializers.ValidationError({'fee_value': 'A percentage fee cannot exceed 100'})
        return attrs


class _ProcessedBySerializer(serializers.ModelSerializer):
    """Adds the name and email of the admin that processed the row."""

    processed_by_name = serializers.SerializerMethodField()
    processed_by_email = serializers.EmailField(source='processed_by.email', read_only=True, default=None)

    def get_processed_by_name(self, obj):
        return obj.processed_by.full_name if obj.processed_by else None


class RetailerDepositSerializer(_ProcessedBySerializer):
    class Meta:
        model = RetailerDeposit
        fields = [
            'id',
            'retailer',
            'amount_deposited',
            'deposit_method',
            'fee_type',
            'fee_value',
            'fee_amount',
            'net_amount',
            'balance_before',
            'balance_after',
            'adjustment_type',
            'processed_by',
            'processed_by_name',
            'processed_by_email',
            'notes',
            'created_at',
        ]
        read_only_fields = fields


class DepositCreateSerializer(serializers.Serializer):
    retailer_id = serializers.UUIDField()
    amount_deposited = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    deposit_method = serializers.ChoiceField(choices=DepositMethod.choices)
    adjustment_type = serializers.ChoiceField(
        choices=DepositAdjustmentType.choices, default=DepositAdjustmentType.DEPOSIT
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class FeePreviewRequestSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    deposit_method = serializers.ChoiceField(choices=DepositMethod.choices)


class FeePreviewSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    deposit_method = serializers.CharField()
    fee_type = serializers.CharField()
    fee_value = serializers.DecimalField(max_digits=10, decimal_places=2)
    fee_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    net_amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class CreditLimitAdjustmentSerializer(_ProcessedBySerializer):
    class Meta:
        model = CreditLimitAdjustment
        fields = [
            'id',
            'retailer',
            'adjustment_type',
            'amount',
            'credit_limit_before',
            'credit_limit_after',
            'notes',
            'processed_by',
            'processed_by_name',
            'processed_by_email',
            'created_at',
        ]
        read_only_fields = fields


class CreditAdjustmentCreateSerializer(serializers.Serializer):
    retailer_id = serializers.UUIDField()
    adjustment_type = serializers.ChoiceField(choices=CreditAdjustmentType.choices)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
