from rest_framework import serializers

from apps.accounts.models import User
from apps.commissions.models import CommissionGroup

from .models import Retailer, RetailerStatus, Terminal, TerminalStatus


class RetailerSerializer(serializers.ModelSerializer):
    """Retailer with account, agent and commission group details."""

    full_name = serializers.CharField(source='user.full_name', read_only=True, default='')
    email = serializers.EmailField(source='user.email', read_only=True, default='')
    agent_profile_id = serializers.UUIDField(source='agent_id', read_only=True)
    agent_name = serializers.SerializerMethodField()
    commission_group_id = serializers.UUIDField(read_only=True)
    commission_group_name = serializers.CharField(source='commission_group.name', read_only=True, default=None)
    available_credit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Retailer
        fields = [
            'id',
            'name',
            'short_code',
            'full_name',
            'email',
            'contact_name',
            'contact_email',
            'contact_phone',
            'location',
            'secondary_contact_name',
            'secondary_contact_phone',
            'balance',
            'credit_limit',
            'credit_used',
            'commission_balance',
            'available_credit',
            'status',
            'agent_profile_id',
            'agent_name',
            'commission_group_id',
            'commission_group_name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_agent_name(self, obj):
        return obj.agent.get_display_name() if obj.agent else None


class _RetailerFieldsSerializer(serializers.Serializer):
    contact_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    contact_email = serializers.EmailField(required=False, allow_blank=True)
    contact_phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    secondary_contact_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    secondary_contact_phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    agent_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role=User.Role.AGENT),
        required=False,
        allow_null=True,
    )
    commission_group_id = serializers.PrimaryKeyRelatedField(
        queryset=CommissionGroup.objects.all(),
        required=False,
        allow_null=True,
    )
    credit_limit = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=RetailerStatus.choices, required=False)

    def validate(self, attrs):
        for field in ('agent_id', 'commission_group_id'):
            if attrs.get(field) is not None:
                attrs[field] = attrs[field].pk
        return attrs


class RetailerCreateSerializer(_RetailerFieldsSerializer):
    """Account and retailer fields in one payload."""

    full_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    password = serializers.CharField(min_length=8, write_only=True, style={'input_type': 'password'})
    name = serializers.CharField(max_length=200)
    initial_balance = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)

    def to_service_kwargs(self):
        data = dict(self.validated_data)
        profile_data = {
            'full_name': data.pop('full_name'),
            'email': data.pop('email'),
            'phone': data.pop('phone', ''),
        }
        password = data.pop('password')
        return {'profile_data': profile_data, 'retailer_data': data, 'password': password}


class RetailerUpdateSerializer(_RetailerFieldsSerializer):
    name = serializers.CharField(max_length=200, required=False)


class BalanceUpdateSerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class PasswordResetSerializer(serializers.Serializer):
    """Optional explicit password; a random one is generated otherwise."""

    password = serializers.CharField(
        min_length=8, required=False, allow_blank=True, write_only=True,
        style={'input_type': 'password'},
    )


class PasswordResetResultSerializer(serializers.Serializer):
    password = serializers.CharField()
    short_code = serializers.CharField()


class AgentSerializer(serializers.ModelSerializer):
    """Agent with retailer count and commission totals."""

    retailer_count = serializers.IntegerField(read_only=True)
    mtd_sales = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    mtd_commission = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    ytd_commission = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    total_commission_earned = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'full_name',
            'email',
            'phone',
            'status',
            'retailer_count',
            'mtd_sales',
            'mtd_commission',
            'ytd_commission',
            'total_commission_earned',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class AgentCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    password = serializers.CharField(min_length=8, write_only=True, style={'input_type': 'password'})


class AgentUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=User.Status.choices, required=False)


class RetailerAssignmentSerializer(serializers.Serializer):
    retailer_id = serializers.UUIDField()


class TerminalSerializer(serializers.ModelSerializer):
    retailer_name = serializers.CharField(source='retailer.name', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True, default=None)

    class Meta:
        model = Terminal
        fields = [
            'id',
            'retailer',
            'retailer_name',
            'name',
            'status',
            'short_code',
            'serial_number',
            'imei_number',
            'email',
            'last_active',
            'created_at',
        ]
        read_only_fields = fields


class TerminalCreateSerializer(serializers.Serializer):
    """
    Terminal for a retailer.

    With email and password a terminal login account is created as well.
    """

    name = serializers.CharField(max_length=150)
    contact_person = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=8, required=False, write_only=True)
    serial_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    imei_number = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate(self, attrs):
        if bool(attrs.get('email')) != bool(attrs.get('password')):
            raise serializers.ValidationError('email and password must be given together')
        return attrs


class TerminalUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False)
    status = serializers.ChoiceField(choices=TerminalStatus.choices, required=False)
    serial_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    imei_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
