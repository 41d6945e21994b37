from rest_framework import serializers

from apps.vouchers.models import VoucherType

from .models import CommissionGroup, CommissionGroupRate, CommissionType, VoucherCommissionOverride


class CommissionGroupRateSerializer(serializers.ModelSerializer):
    voucher_type_name = serializers.CharField(source='voucher_type.name', read_only=True)

    class Meta:
        model = CommissionGroupRate
        fields = [
            'id',
            'voucher_type',
            'voucher_type_name',
            'retailer_pct',
            'agent_pct',
            'supplier_pct',
        ]
        read_only_fields = fields


class CommissionGroupSerializer(serializers.ModelSerializer):
    """Group with its rates; counts are present when the queryset is annotated."""

    rates = CommissionGroupRateSerializer(many=True, read_only=True)
    retailer_count = serializers.IntegerField(read_only=True, required=False)
    agent_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = CommissionGroup
        fields = [
            'id',
            'name',
            'description',
            'is_active',
            'rates',
            'retailer_count',
            'agent_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CommissionGroupListSerializer(serializers.ModelSerializer):
    retailer_count = serializers.IntegerField(read_only=True)
    agent_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = CommissionGroup
        fields = ['id', 'name', 'description', 'is_active', 'retailer_count', 'agent_count', 'created_at']
        read_only_fields = fields


class RateInputSerializer(serializers.Serializer):
    voucher_type_id = serializers.PrimaryKeyRelatedField(queryset=VoucherType.objects.all())
    retailer_pct = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100)
    agent_pct = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100)
    supplier_pct = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=100, required=False
    )

    def validate(self, attrs):
        attrs['voucher_type_id'] = attrs['voucher_type_id'].id
        return attrs


class CommissionGroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    rates = RateInputSerializer(many=True, required=False)


class CommissionGroupUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False)


class VoucherCommissionOverrideSerializer(serializers.ModelSerializer):
    voucher_type_name = serializers.CharField(source='voucher_type.name', read_only=True)

    class Meta:
        model = VoucherCommissionOverride
        fields = [
            'id',
            'commission_group',
            'voucher_type',
            'voucher_type_name',
            'amount',
            'supplier_pct',
            'retailer_pct',
            'agent_pct',
            'commission_type',
            'updated_at',
        ]
        read_only_fields = fields


class OverrideLookupSerializer(serializers.Serializer):
    """Query parameters that identify overrides."""

    voucher_type = serializers.UUIDField()
    group = serializers.UUIDField(required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)


class OverrideUpsertSerializer(serializers.Serializer):
    voucher_type = serializers.UUIDField()
    group = serializers.UUIDField(required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    supplier_pct = serializers.DecimalField(max_digits=10, decimal_places=4)
    retailer_pct = serializers.DecimalField(max_digits=10, decimal_places=4)
    agent_pct = serializers.DecimalField(max_digits=10, decimal_places=4)
    commission_type = serializers.ChoiceField(
        choices=CommissionType.choices, default=CommissionType.PERCENTAGE
    )


class CommissionSplitSerializer(serializers.Serializer):
    supplier = serializers.DecimalField(max_digits=10, decimal_places=2)
    retailer = serializers.DecimalField(max_digits=10, decimal_places=2)
    agent = serializers.DecimalField(max_digits=10, decimal_places=2)
    profit = serializers.DecimalField(max_digits=10, decimal_places=2)
    source = serializers.CharField()
