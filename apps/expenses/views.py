import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Expense, ExpenseTag, Player, Team
from .serializers import (
    BalanceSerializer,
    ExpenseFilterSerializer,
    ExpenseSerializer,
    ExpenseTagSerializer,
    ExpenseWriteSerializer,
    LedgerSummarySerializer,
    PlayerSerializer,
    SettleInputSerializer,
    TeamFilterSerializer,
    TeamSerializer,
    TransferSerializer,
)
from .services import (
    ExpenseServiceError,
    PlayerInUseError,
    RecordValidationError,
    SplitComputationError,
    TeamNotFoundError,
    Transfer,
)
from .services.ledger import (
    build_record,
    compute_team_summary,
    delete_player,
    delete_tag,
    ledger_currency,
    money,
    record_settlement,
    save_expense,
)

logger = logging.getLogger(__name__)


def error_response(error: ExpenseServiceError):
    """Convert a service error into an HTTP response."""
    if isinstance(error, RecordValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, SplitComputationError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(error, TeamNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, PlayerInUseError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    body = {'error': str(error), 'code': error.code}
    if error.record_id:
        body['record'] = error.record_id
    return Response(body, status=status_code)


class LedgerPagination(PageNumberPagination):
    """Custom pagination for ledger listings."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class TeamScopedMixin:
    """Filter a queryset by the optional ``team`` query parameter."""

    def filter_by_team(self, queryset):
        filter_serializer = TeamFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        team_id = filter_serializer.validated_data.get('team')
        if team_id:
            queryset = queryset.filter(team_id=team_id)
        return queryset


class TeamViewSet(viewsets.ModelViewSet):
    """
    ViewSet for teams and their ledger.

    list / create / retrieve / update / destroy: Team CRUD
    balances: Net balance per player
    settlements: Suggested payments that settle every balance
    summary: Balances and settlements together
    settle: Record a payment between two players
    """

    queryset = Team.objects.all()
    serializer_class = TeamSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = LedgerPagination

    def _summary(self):
        return compute_team_summary(self.get_object().id)

    @staticmethod
    def _balance_rows(summary):
        names = summary.names()
        return [
            {'participant': pid, 'name': names.get(pid, ''), 'balance': money(balance)}
            for pid, balance in summary.balances.items()
        ]

    @staticmethod
    def _transfer_rows(summary):
        return [
            {'from': t.from_id, 'to': t.to_id, 'amount': money(t.amount)}
            for t in summary.transfers
        ]

    @extend_schema(responses={200: BalanceSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def balances(self, request, pk=None):
        """
        Get every player's net balance.

        GET /api/teams/{id}/balances/
        """
        try:
            summary = self._summary()
        except ExpenseServiceError as e:
            return error_response(e)
        return Response(BalanceSerializer(self._balance_rows(summary), many=True).data)

    @extend_schema(responses={200: TransferSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def settlements(self, request, pk=None):
        """
        Get suggested payments that settle all balances.

        GET /api/teams/{id}/settlements/
        """
        try:
            summary = self._summary()
        except ExpenseServiceError as e:
            return error_response(e)
        return Response(TransferSerializer(self._transfer_rows(summary), many=True).data)

    @extend_schema(responses={200: LedgerSummarySerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """
        Get balances and suggested payments together.

        GET /api/teams/{id}/summary/
        """
        try:
            summary = self._summary()
        except ExpenseServiceError as e:
            return error_response(e)
        serializer = LedgerSummarySerializer({
            'currency': ledger_currency(),
            'balances': self._balance_rows(summary),
            'settlements': self._transfer_rows(summary),
        })
        return Response(serializer.data)

    @extend_schema(request=SettleInputSerializer, responses={201: ExpenseSerializer})
    @action(detail=True, methods=['post'])
    def settle(self, request, pk=None):
        """
        Record that one player paid another.

        POST /api/teams/{id}/settle/
        Body: {"from": "<player id>", "to": "<player id>", "amount": "30.00"}
        """
        team = self.get_object()

        input_serializer = SettleInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        transfer = Transfer(
            from_id=str(data['from']),
            to_id=str(data['to']),
            amount=data['amount'],
        )
        try:
            expense = record_settlement(
                team_id=team.id, transfer=transfer, date=data.get('date')
            )
        except ExpenseServiceError as e:
            logger.info("Rejected settlement for team %s: %s", team.id, e)
            return error_response(e)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)


class PlayerViewSet(TeamScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for the team roster.

    Deleting a player who appears in any expense is refused.
    """

    queryset = Player.objects.select_related('team')
    serializer_class = PlayerSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = LedgerPagination

    def get_queryset(self):
        return self.filter_by_team(super().get_queryset())

    def destroy(self, request, *args, **kwargs):
        """Delete a player unless expenses still reference them."""
        try:
            delete_player(player=self.get_object())
        except PlayerInUseError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ExpenseTagViewSet(TeamScopedMixin, viewsets.ModelViewSet):
    """ViewSet for expense tags."""

    queryset = ExpenseTag.objects.select_related('team')
    serializer_class = ExpenseTagSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = LedgerPagination

    def get_queryset(self):
        return self.filter_by_team(super().get_queryset())

    def perform_destroy(self, instance):
        delete_tag(tag=instance)


class ExpenseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for expense and settlement records.

    Records are replaced as a whole on edit, so PATCH is not offered.

    list: Get records, newest first (filterable by team, kind, date range)
    create: Create a record
    retrieve: Get a specific record
    update: Replace a record
    destroy: Delete a record
    """

    queryset = Expense.objects.select_related('tag', 'payer').prefetch_related('participants')
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = LedgerPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter records using input serializer validation."""
        queryset = super().get_queryset()

        filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('team'):
            queryset = queryset.filter(team_id=params['team'])
        if 'kind' in params:
            queryset = queryset.filter(kind=params['kind'])
        if 'date_from' in params:
            queryset = queryset.filter(date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        """Use the write serializer for create and update."""
        if self.action in ['create', 'update']:
            return ExpenseWriteSerializer
        return ExpenseSerializer

    def _save(self, request, instance=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = build_record(
            record_id=str(instance.id) if instance else None,
            payer=data.get('payer'),
            amount=data['amount'],
            participants=data.get('participants', []),
            split_method=data.get('split_method', 'equal'),
            weights=data.get('weights'),
            custom_shares=data.get('custom_shares'),
            tag=data.get('tag'),
            custom_name=data.get('custom_name', '').strip(),
            date=data.get('date') or (instance.date if instance else None),
            kind=data.get('kind', 'expense'),
        )
        try:
            expense = save_expense(team=data['team'], record=record, instance=instance)
        except ExpenseServiceError as e:
            logger.info("Rejected expense for team %s: %s", data['team'].id, e)
            return None, error_response(e)
        return expense, None

    def create(self, request, *args, **kwargs):
        """Create an expense after ledger validation."""
        expense, error = self._save(request)
        if error:
            return error
        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Replace an expense entirely."""
        expense, error = self._save(request, instance=self.get_object())
        if error:
            return error
        return Response(ExpenseSerializer(expense).data)
