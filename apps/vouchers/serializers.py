from rest_framework import serializers

from .models import (
    DataDuration,
    NetworkProvider,
    VoucherCategory,
    VoucherInventory,
    VoucherType,
)


class VoucherTypeSerializer(serializers.ModelSerializer):
    icon = serializers.CharField(read_only=True)

    class Meta:
        model = VoucherType
        fields = [
            'id',
            'name',
            'supplier_commission_pct',
            'category',
            'sub_category',
            'network_provider',
            'is_active',
            'icon',
        ]
        read_only_fields = ['id', 'icon']


class SupplierCommissionSerializer(serializers.Serializer):
    supplier_commission_pct = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=100
    )


class VoucherTypeFilterSerializer(serializers.Serializer):
    """Query parameters of the voucher type list."""

    include_inactive = serializers.BooleanField(required=False, default=False)
    network_provider = serializers.ChoiceField(choices=NetworkProvider.choices, required=False)
    category = serializers.ChoiceField(choices=VoucherCategory.choices, required=False)
    sub_category = serializers.ChoiceField(choices=DataDuration.choices, required=False)


class VoucherInventorySerializer(serializers.ModelSerializer):
    voucher_type_name = serializers.CharField(source='voucher_type.name', read_only=True)

    class Meta:
        model = VoucherInventory
        fields = [
            'id',
            'voucher_type',
            'voucher_type_name',
            'amount',
            'pin',
            'serial_number',
            'expiry_date',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class VoucherUploadItemSerializer(serializers.Serializer):
    voucher_type_id = serializers.PrimaryKeyRelatedField(queryset=VoucherType.objects.all())
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    pin = serializers.CharField(max_length=64)
    serial_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    expiry_date = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        attrs['voucher_type_id'] = attrs['voucher_type_id'].id
        return attrs


class VoucherFileUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


class VoucherFileUploadResultSerializer(serializers.Serializer):
    type_name = serializers.CharField()
    uploaded = serializers.IntegerField()
    total_lines = serializers.IntegerField()
    valid_lines = serializers.IntegerField()
    errors = serializers.ListField(child=serializers.CharField())


class VoucherTypeSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    total_vouchers = serializers.IntegerField()
    available_vouchers = serializers.IntegerField()
    sold_vouchers = serializers.IntegerField()
    disabled_vouchers = serializers.IntegerField()
    unique_amounts = serializers.ListField(child=serializers.DecimalField(max_digits=10, decimal_places=2))
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    icon = serializers.CharField()
    supplier_commission_pct = serializers.DecimalField(max_digits=5, decimal_places=2)


class CategoryStatsSerializer(serializers.Serializer):
    total_vouchers = serializers.IntegerField()
    inventory_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    sold_value = serializers.DecimalField(max_digits=14, decimal_places=2)
