from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.models import PermissionKey
from apps.accounts.permissions import (
    IsAdminRole,
    HasAdminPermission,
    IsRetailerRole,
    IsAgentRole,
    IsTerminalRole,
)
from apps.accounts.services import DuplicateEmailError

from .models import RetailerStatus
from .serializers import (
    RetailerSerializer,
    RetailerCreateSerializer,
    RetailerUpdateSerializer,
    BalanceUpdateSerializer,
    PasswordResetSerializer,
    PasswordResetResultSerializer,
    AgentSerializer,
    AgentCreateSerializer,
    AgentUpdateSerializer,
    RetailerAssignmentSerializer,
    TerminalSerializer,
    TerminalCreateSerializer,
    TerminalUpdateSerializer,
)
from .services import (
    fetch_retailers,
    fetch_retailer_by_id,
    fetch_my_retailer,
    create_retailer,
    update_retailer,
    update_retailer_balance,
    reset_retailer_password,
    fetch_agents,
    fetch_agent_by_id,
    create_agent,
    update_agent,
    fetch_agent_retailers,
    fetch_unassigned_retailers,
    assign_retailer_to_agent,
    unassign_retailer_from_agent,
    fetch_terminals,
    fetch_terminal_by_id,
    fetch_my_terminal,
    create_terminal,
    create_terminal_with_user,
    update_terminal,
    reset_terminal_password,
    # Exceptions
    RetailerNotFoundError,
    AgentNotFoundError,
    TerminalNotFoundError,
    MissingUserAccountError,
    ShortCodeGenerationError,
)

ManageRetailers = HasAdminPermission(PermissionKey.MANAGE_RETAILERS)
ManageAgents = HasAdminPermission(PermissionKey.MANAGE_AGENTS)
ManageTerminals = HasAdminPermission(PermissionKey.MANAGE_TERMINALS)
ManageCreditLimits = HasAdminPermission(PermissionKey.MANAGE_CREDIT_LIMITS)
ResetPasswords = HasAdminPermission(PermissionKey.RESET_PASSWORDS)


class RetailerViewSet(viewsets.ViewSet):
    """
    Retailer management.

    list: All retailers (?status, ?agent, ?commission_group)
    retrieve: One retailer
    create: Retailer login account + retailer record
    partial_update: Contact details, agent, commission group, credit limit, status
    balance: Overwrite the balance
    reset_password: New password for the retailer login
    terminals: List or add terminals of a retailer
    me: The signed-in retailer's own record
    """

    lookup_value_regex = r'[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [IsAdminRole()]
        if self.action == 'me':
            return [IsRetailerRole()]
        if self.action == 'balance':
            return [ManageCreditLimits()]
        if self.action == 'reset_password':
            return [ResetPasswords()]
        if self.action == 'terminals':
            if self.request.method == 'GET':
                return [IsAdminRole()]
            return [ManageTerminals()]
        return [ManageRetailers()]

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, enum=RetailerStatus.values),
            OpenApiParameter('agent', str, description='Agent id'),
            OpenApiParameter('commission_group', str, description='Commission group id'),
        ],
        responses={200: RetailerSerializer(many=True)},
        tags=['retailers'],
    )
    def list(self, request):
        retailers = fetch_retailers(
            status=request.query_params.get('status'),
            agent_id=request.query_params.get('agent'),
            commission_group_id=request.query_params.get('commission_group'),
        )
        return Response(RetailerSerializer(retailers, many=True).data)

    @extend_schema(responses={200: RetailerSerializer}, tags=['retailers'])
    def retrieve(self, request, pk=None):
        try:
            retailer = fetch_retailer_by_id(retailer_id=pk)
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(RetailerSerializer(retailer).data)

    @extend_schema(request=RetailerCreateSerializer, responses={201: RetailerSerializer}, tags=['retailers'])
    def create(self, request):
        serializer = RetailerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            retailer = create_retailer(**serializer.to_service_kwargs())
        except (DuplicateEmailError, ShortCodeGenerationError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RetailerSerializer(retailer).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=RetailerUpdateSerializer, responses={200: RetailerSerializer}, tags=['retailers'])
    def partial_update(self, request, pk=None):
        serializer = RetailerUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            retailer = update_retailer(retailer_id=pk, **serializer.validated_data)
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(RetailerSerializer(retailer).data)

    @extend_schema(request=BalanceUpdateSerializer, responses={200: RetailerSerializer}, tags=['retailers'])
    @action(detail=True, methods=['patch'])
    def balance(self, request, pk=None):
        serializer = BalanceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            update_retailer_balance(retailer_id=pk, balance=serializer.validated_data['balance'])
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(RetailerSerializer(fetch_retailer_by_id(retailer_id=pk)).data)

    @extend_schema(
        request=PasswordResetSerializer,
        responses={200: PasswordResetResultSerializer},
        tags=['retailers'],
    )
    @action(detail=True, methods=['post'], url_path='reset-password')
    def reset_password(self, request, pk=None):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = reset_retailer_password(
                retailer_id=pk,
                password=serializer.validated_data.get('password') or None,
            )
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MissingUserAccountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(result)

    @extend_schema(
        methods=['GET'],
        responses={200: TerminalSerializer(many=True)},
        tags=['retailers'],
    )
    @extend_schema(
        methods=['POST'],
        request=TerminalCreateSerializer,
        responses={201: TerminalSerializer},
        tags=['retailers'],
    )
    @action(detail=True, methods=['get', 'post'])
    def terminals(self, request, pk=None):
        try:
            fetch_retailer_by_id(retailer_id=pk)
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        if request.method == 'GET':
            return Response(TerminalSerializer(fetch_terminals(retailer_id=pk), many=True).data)

        serializer = TerminalCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            if data.get('email'):
                terminal = create_terminal_with_user(
                    name=data['name'],
                    contact_person=data.get('contact_person') or data['name'],
                    retailer_id=pk,
                    email=data['email'],
                    password=data['password'],
                    serial_number=data.get('serial_number', ''),
                    imei_number=data.get('imei_number', ''),
                )
            else:
                terminal = create_terminal(
                    retailer_id=pk,
                    name=data['name'],
                    serial_number=data.get('serial_number', ''),
                    imei_number=data.get('imei_number', ''),
                )
        except DuplicateEmailError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TerminalSerializer(terminal).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: RetailerSerializer}, tags=['retailers'])
    @action(detail=False, methods=['get'])
    def me(self, request):
        try:
            retailer = fetch_my_retailer(request.user)
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(RetailerSerializer(retailer).data)


class AgentViewSet(viewsets.ViewSet):
    """
    Agent management.

    list: Agents with retailer counts and commission totals
    retrieve: One agent summary
    create / partial_update: Manage agent accounts
    retailers: Retailers assigned to the agent
    assign / unassign: Move a retailer to or away from the agent
    unassigned: Retailers without an agent
    me: The signed-in agent's summary and retailers
    """

    lookup_value_regex = r'[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action in ['list', 'retrieve', 'retailers', 'unassigned']:
            return [IsAdminRole()]
        if self.action == 'me':
            return [IsAgentRole()]
        return [ManageAgents()]

    @extend_schema(responses={200: AgentSerializer(many=True)}, tags=['agents'])
    def list(self, request):
        return Response(AgentSerializer(fetch_agents(), many=True).data)

    @extend_schema(responses={200: AgentSerializer}, tags=['agents'])
    def retrieve(self, request, pk=None):
        try:
            agent = fetch_agent_by_id(agent_id=pk)
        except AgentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(AgentSerializer(agent).data)

    @extend_schema(request=AgentCreateSerializer, responses={201: AgentSerializer}, tags=['agents'])
    def create(self, request):
        serializer = AgentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        password = data.pop('password')

        try:
            agent = create_agent(profile_data=data, password=password)
        except DuplicateEmailError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AgentSerializer(agent).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=AgentUpdateSerializer, responses={200: AgentSerializer}, tags=['agents'])
    def partial_update(self, request, pk=None):
        serializer = AgentUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            agent = update_agent(agent_id=pk, **serializer.validated_data)
        except AgentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateEmailError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AgentSerializer(agent).data)

    @extend_schema(responses={200: RetailerSerializer(many=True)}, tags=['agents'])
    @action(detail=True, methods=['get'])
    def retailers(self, request, pk=None):
        try:
            retailers = fetch_agent_retailers(agent_id=pk)
        except AgentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(RetailerSerializer(retailers, many=True).data)

    @extend_schema(request=RetailerAssignmentSerializer, responses={200: RetailerSerializer}, tags=['agents'])
    @action(detail=True, methods=['post'])
    def assign(self, request, pk=None):
        serializer = RetailerAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            retailer = assign_retailer_to_agent(
                retailer_id=serializer.validated_data['retailer_id'], agent_id=pk
            )
        except (AgentNotFoundError, RetailerNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(RetailerSerializer(fetch_retailer_by_id(retailer_id=retailer.id)).data)

    @extend_schema(request=RetailerAssignmentSerializer, responses={200: RetailerSerializer}, tags=['agents'])
    @action(detail=True, methods=['post'])
    def unassign(self, request, pk=None):
        serializer = RetailerAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            retailer = unassign_retailer_from_agent(
                retailer_id=serializer.validated_data['retailer_id'], agent_id=pk
            )
        except RetailerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(RetailerSerializer(fetch_retailer_by_id(retailer_id=retailer.id)).data)

    @extend_schema(responses={200: RetailerSerializer(many=True)}, tags=['agents'])
    @action(detail=False, methods=['get'])
    def unassigned(self, request):
        return Response(RetailerSerializer(fetch_unassigned_retailers(), many=True).data)

    @extend_schema(tags=['agents'])
    @action(detail=False, methods=['get'])
    def me(self, request):
        agent = fetch_agent_by_id(agent_id=request.user.id)
        return Response({
            'agent': AgentSerializer(agent).data,
            'retailers': RetailerSerializer(fetch_agent_retailers(agent_id=agent.id), many=True).data,
        })


class TerminalViewSet(viewsets.ViewSet):
    """
    Terminal management.

    retrieve / partial_update: One terminal
    reset_password: New password for the terminal login
    me: The signed-in terminal
    """

    lookup_value_regex = r'[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action == 'retrieve':
            return [IsAdminRole()]
        if self.action == 'me':
            return [IsTerminalRole()]
        if self.action == 'reset_password':
            return [ResetPasswords()]
        return [ManageTerminals()]

    @extend_schema(responses={200: TerminalSerializer}, tags=['terminals'])
    def retrieve(self, request, pk=None):
        try:
            terminal = fetch_terminal_by_id(terminal_id=pk)
        except TerminalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(TerminalSerializer(terminal).data)

    @extend_schema(request=TerminalUpdateSerializer, responses={200: TerminalSerializer}, tags=['terminals'])
    def partial_update(self, request, pk=None):
        serializer = TerminalUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            terminal = update_terminal(terminal_id=pk, **serializer.validated_data)
        except TerminalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(TerminalSerializer(terminal).data)

    @extend_schema(
        request=PasswordResetSerializer,
        responses={200: PasswordResetResultSerializer},
        tags=['terminals'],
    )
    @action(detail=True, methods=['post'], url_path='reset-password')
    def reset_password(self, request, pk=None):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = reset_terminal_password(
                terminal_id=pk,
                password=serializer.validated_data.get('password') or None,
            )
        except TerminalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MissingUserAccountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(result)

    @extend_schema(responses={200: TerminalSerializer}, tags=['terminals'])
    @action(detail=False, methods=['get'])
    def me(self, request):
        try:
            terminal = fetch_my_terminal(request.user)
        except TerminalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(TerminalSerializer(terminal).data)
