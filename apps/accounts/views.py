from rest_framework import status, viewsets, serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .models import PermissionKey, PERMISSION_CATEGORIES, PERMISSION_DESCRIPTIONS
from .permissions import HasAdminPermission, IsSuperAdmin
from .serializers import (
    UserSerializer,
    UserLoginSerializer,
    PasswordResetRequestSerializer,
    PasswordResetConfirmSerializer,
    AdminSerializer,
    AdminCreateSerializer,
    AdminUpdateSerializer,
    PermissionKeySerializer,
    TogglePermissionSerializer,
    SetPermissionsSerializer,
    MyPermissionsSerializer,
    PermissionInfoSerializer,
)
from .services import (
    authenticate_user,
    request_password_reset as request_password_reset_service,
    confirm_password_reset as confirm_password_reset_service,
    fetch_admins,
    fetch_admin_by_id,
    create_admin,
    update_admin,
    activate_admin,
    deactivate_admin,
    fetch_admin_permissions,
    fetch_my_permissions,
    add_permission,
    remove_permission,
    set_admin_permissions,
    toggle_permission,
    # Exceptions
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    WeakPasswordError,
    AdminNotFoundError,
    DuplicateEmailError,
    InsufficientPermissionsError,
    InvalidPermissionError,
)

# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email, or a retailer/terminal short code, and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email or short code and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    responses={200: MyPermissionsSerializer},
    description="Effective admin permissions of the current user. Super admins receive every key.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_permissions(request):
    """Return the caller's permission keys."""
    return Response(fetch_my_permissions(request.user))


@extend_schema(
    responses={200: PermissionInfoSerializer(many=True)},
    description="All permission keys with label, description and category.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def permission_catalog(request):
    """List every grantable permission."""
    category_of = {
        key: category
        for category, keys in PERMISSION_CATEGORIES.items()
        for key in keys
    }
    data = [
        {
            'key': key.value,
            'label': key.label,
            'description': PERMISSION_DESCRIPTIONS[key],
            'category': category_of[key],
        }
        for key in PermissionKey
    ]
    return Response(data)


@extend_schema(
    request=PasswordResetRequestSerializer,
    responses={200: MessageResponseSerializer},
    description="Request a password reset email. Always returns the same message.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_password_reset(request):
    """Request password reset email."""
    serializer = PasswordResetRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    message = request_password_reset_service(email=serializer.validated_data['email'])
    return Response({'message': message})


@extend_schema(
    request=PasswordResetConfirmSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Confirm password reset with token and set new password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def confirm_password_reset(request):
    """Confirm password reset with token."""
    serializer = PasswordResetConfirmSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        confirm_password_reset_service(**serializer.validated_data)
    except (WeakPasswordError, InvalidTokenError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Password updated successfully. Please log in with your new password.'
    })


class AdminViewSet(viewsets.ViewSet):
    """
    Admin user management.

    list: All admins, newest first
    create: Create an admin (optionally super admin)
    retrieve: One admin with permissions
    partial_update: Update profile fields or status
    activate / deactivate: Toggle status

    Permission changes are restricted to super admins.
    """

    lookup_value_regex = r'[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action in ['add_permission', 'remove_permission', 'set_permissions', 'toggle_permission']:
            return [IsSuperAdmin()]
        return [HasAdminPermission(PermissionKey.MANAGE_ADMINS)()]

    @extend_schema(responses={200: AdminSerializer(many=True)}, tags=['admins'])
    def list(self, request):
        return Response(AdminSerializer(fetch_admins(), many=True).data)

    @extend_schema(responses={200: AdminSerializer, 404: ErrorResponseSerializer}, tags=['admins'])
    def retrieve(self, request, pk=None):
        try:
            admin = fetch_admin_by_id(admin_id=pk)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(AdminSerializer(admin).data)

    @extend_schema(request=AdminCreateSerializer, responses={201: AdminSerializer}, tags=['admins'])
    def create(self, request):
        serializer = AdminCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data.get('is_super_admin') and not request.user.is_super_admin:
            return Response(
                {'error': 'Only super admins can create super admins'},
                status=status.HTTP_403_FORBIDDEN
            )

        try:
            admin = create_admin(created_by=request.user, **serializer.validated_data)
        except (DuplicateEmailError, InvalidPermissionError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AdminSerializer(admin).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=AdminUpdateSerializer, responses={200: AdminSerializer}, tags=['admins'])
    def partial_update(self, request, pk=None):
        serializer = AdminUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if 'is_super_admin' in serializer.validated_data and not request.user.is_super_admin:
            return Response(
                {'error': 'Only super admins can change super admin status'},
                status=status.HTTP_403_FORBIDDEN
            )

        try:
            admin = update_admin(admin_id=pk, **serializer.validated_data)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateEmailError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AdminSerializer(admin).data)

    @extend_schema(request=None, responses={200: AdminSerializer}, tags=['admins'])
    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        try:
            admin = activate_admin(admin_id=pk)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(AdminSerializer(admin).data)

    @extend_schema(request=None, responses={200: AdminSerializer}, tags=['admins'])
    @action(detail=True, methods=['post'])
    def deactivate(self, request, pk=None):
        if str(request.user.id) == str(pk):
            return Response(
                {'error': 'You cannot deactivate your own account'},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            admin = deactivate_admin(admin_id=pk)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(AdminSerializer(admin).data)

    @extend_schema(responses={200: SetPermissionsSerializer}, tags=['admins'])
    @action(detail=True, methods=['get'], url_path='permissions')
    def permission_list(self, request, pk=None):
        """Stored permission keys of one admin."""
        try:
            fetch_admin_by_id(admin_id=pk)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response({'permissions': fetch_admin_permissions(admin_id=pk)})

    def _change_permissions(self, request, pk, serializer_class, change):
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            change(admin_id=pk, acting_user=request.user, **serializer.validated_data)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPermissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'permissions': fetch_admin_permissions(admin_id=pk)})

    @extend_schema(request=PermissionKeySerializer, responses={200: SetPermissionsSerializer}, tags=['admins'])
    @action(detail=True, methods=['post'], url_path='permissions/add')
    def add_permission(self, request, pk=None):
        return self._change_permissions(request, pk, PermissionKeySerializer, add_permission)

    @extend_schema(request=PermissionKeySerializer, responses={200: SetPermissionsSerializer}, tags=['admins'])
    @action(detail=True, methods=['post'], url_path='permissions/remove')
    def remove_permission(self, request, pk=None):
        return self._change_permissions(request, pk, PermissionKeySerializer, remove_permission)

    @extend_schema(request=TogglePermissionSerializer, responses={200: SetPermissionsSerializer}, tags=['admins'])
    @action(detail=True, methods=['post'], url_path='permissions/toggle')
    def toggle_permission(self, request, pk=None):
        return self._change_permissions(request, pk, TogglePermissionSerializer, toggle_permission)

    @extend_schema(request=SetPermissionsSerializer, responses={200: SetPermissionsSerializer}, tags=['admins'])
    @action(detail=True, methods=['put'], url_path='permissions/set')
    def set_permissions(self, request, pk=None):
        serializer = SetPermissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            keys = set_admin_permissions(
                admin_id=pk,
                permission_keys=serializer.validated_data['permissions'],
                acting_user=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except AdminNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPermissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'permissions': keys})
