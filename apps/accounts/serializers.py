from rest_framework import serializers

from .models import User, PermissionKey


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'full_name',
            'phone',
            'role',
            'status',
            'is_super_admin',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Email or retailer/terminal short code, plus password."""

    email = serializers.EmailField(required=False)
    short_code = serializers.CharField(required=False, max_length=16)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        if bool(attrs.get('email')) == bool(attrs.get('short_code')):
            raise serializers.ValidationError('Provide either email or short_code')
        return attrs


class PasswordResetRequestSerializer(serializers.Serializer):
    """Serializer for password reset request."""

    email = serializers.EmailField(required=True)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """
    Serializer for password reset confirmation.

    Complexity rules are enforced by the service so that the API and
    the management tooling share one message.
    """

    token = serializers.CharField(required=True)
    new_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )


class AdminSerializer(serializers.ModelSerializer):
    """Admin user with the stored permission keys."""

    permissions = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'full_name',
            'phone',
            'is_super_admin',
            'status',
            'permissions',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_permissions(self, obj):
        if obj.is_super_admin:
            return list(PermissionKey.values)
        return sorted(p.permission_key for p in obj.admin_permissions.all())


class AdminCreateSerializer(serializers.Serializer):
    """Input for creating an admin."""

    full_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    password = serializers.CharField(min_length=8, write_only=True, style={'input_type': 'password'})
    is_super_admin = serializers.BooleanField(required=False, default=False)
    permissions = serializers.ListField(
        child=serializers.ChoiceField(choices=PermissionKey.choices),
        required=False,
        default=list,
    )


class AdminUpdateSerializer(serializers.Serializer):
    """Partial update of an admin profile."""

    full_name = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    is_super_admin = serializers.BooleanField(required=False)
    status = serializers.ChoiceField(choices=User.Status.choices, required=False)


class PermissionKeySerializer(serializers.Serializer):
    permission_key = serializers.ChoiceField(choices=PermissionKey.choices)


class TogglePermissionSerializer(PermissionKeySerializer):
    enabled = serializers.BooleanField()


class SetPermissionsSerializer(serializers.Serializer):
    permissions = serializers.ListField(
        child=serializers.ChoiceField(choices=PermissionKey.choices),
        allow_empty=True,
    )


class MyPermissionsSerializer(serializers.Serializer):
    permissions = serializers.ListField(child=serializers.CharField())
    is_super_admin = serializers.BooleanField()


class PermissionInfoSerializer(serializers.Serializer):
    """One entry of the permission catalogue."""

    key = serializers.CharField()
    label = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
