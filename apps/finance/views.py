from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.messes.permissions import IsMessMember, IsMessManager
from apps.messes.session import build_session
from apps.settlement.serializers import PeriodQuerySerializer, ErrorSerializer
from .exceptions import (
    NotInMessError,
    InsufficientPermissionsError,
    MemberNotFoundError,
    InvalidAmountError,
    ShoppingItemNotFoundError,
    ItemAlreadyBoughtError,
)
from .models import Expense, Deposit, ShoppingItem
from .serializers import (
    ExpenseFilterSerializer,
    DepositFilterSerializer,
    ExpenseCreateSerializer,
    DepositCreateSerializer,
    GroceryPurchaseCreateSerializer,
    ShoppingItemCreateSerializer,
    ExpenseSerializer,
    DepositSerializer,
    GroceryPurchaseSerializer,
    ShoppingItemSerializer,
    OverheadSummarySerializer,
    DepositSummarySerializer,
    GrocerySpentSerializer,
    RentStatusSerializer,
    RentSummarySerializer,
)
from .services import (
    ExpenseService,
    DepositService,
    GroceryService,
    ShoppingListService,
    RentService,
)

PERIOD_PARAMETER = OpenApiParameter(
    'period', OpenApiTypes.STR, description='Month period (YYYY-MM), defaults to the current month'
)


def _error_response(e):
    """Map a finance service error to an HTTP response."""
    if isinstance(e, (NotInMessError, InsufficientPermissionsError)):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(e, ShoppingItemNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(e)}, status=code)


SERVICE_ERRORS = (
    NotInMessError,
    InsufficientPermissionsError,
    MemberNotFoundError,
    InvalidAmountError,
    ShoppingItemNotFoundError,
    ItemAlreadyBoughtError,
    ValueError,
)


def _period(request):
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    return query_serializer.validated_data['period']


class ExpenseViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Expenses of the caller's mess.

    list: Expenses for a month (?period=YYYY-MM&category=utility)
    create: Record an expense (manager only)
    retrieve: Get one expense
    overhead: Overhead divided across members for a month
    """

    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated, IsMessMember]

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), IsMessManager()]
        return super().get_permissions()

    def get_queryset(self):
        session = build_session(self.request.user)
        if self.action == 'list':
            filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            params = filter_serializer.validated_data
            return ExpenseService.list_expenses(
                session.mess_id, params['period'], params.get('category')
            )
        return Expense.objects.filter(mess_id=session.mess_id).select_related('paid_by', 'recorded_by')

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer, 400: ErrorSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        session = build_session(request.user)

        try:
            expense = ExpenseService.record_expense(
                mess_id=session.mess_id,
                recorded_by=request.user,
                title=data['title'],
                amount=data['amount'],
                category=data['category'],
                paid_by_id=data.get('paid_by'),
                date=data.get('date'),
                note=data['note'],
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[PERIOD_PARAMETER], responses={200: OverheadSummarySerializer})
    @action(detail=False, methods=['get'])
    def overhead(self, request):
        """GET /api/finance/expenses/overhead/?period=YYYY-MM"""
        session = build_session(request.user)
        summary = ExpenseService.overhead_summary(session.mess_id, _period(request))
        return Response(OverheadSummarySerializer(summary).data)


class DepositViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Deposits of the caller's mess.

    list: Deposits for a month (?period=YYYY-MM&user=<uuid>)
    create: Record a deposit for a member (manager only)
    summary: Totals per category, per member
    """

    serializer_class = DepositSerializer
    permission_classes = [IsAuthenticated, IsMessMember]

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), IsMessManager()]
        return super().get_permissions()

    def get_queryset(self):
        session = build_session(self.request.user)
        filter_serializer = DepositFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data
        return DepositService.list_deposits(session.mess_id, params['period'], params.get('user'))

    @extend_schema(request=DepositCreateSerializer, responses={201: DepositSerializer, 400: ErrorSerializer})
    def create(self, request, *args, **kwargs):
        serializer = DepositCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        session = build_session(request.user)

        try:
            deposit = DepositService.record_deposit(
                mess_id=session.mess_id,
                recorded_by=request.user,
                user_id=data['user_id'],
                amount=data['amount'],
                category=data['category'],
                rent_month=data['rent_month'],
                date=data.get('date'),
                note=data['note'],
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(DepositSerializer(deposit).data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[PERIOD_PARAMETER], responses={200: DepositSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """GET /api/finance/deposits/summary/?period=YYYY-MM"""
        session = build_session(request.user)
        summary = DepositService.deposit_summary(session.mess_id, _period(request))
        return Response(DepositSummarySerializer(summary).data)


class GroceryPurchaseViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Grocery purchases.

    list: Purchase history (managers see all, members their own)
    create: Record a grocery run paid by the caller
    spent: Spending per buyer for a month
    """

    serializer_class = GroceryPurchaseSerializer
    permission_classes = [IsAuthenticated, IsMessMember]

    def get_queryset(self):
        session = build_session(self.request.user)
        period = _period(self.request) if 'period' in self.request.query_params else None
        return GroceryService.purchase_history(session.mess_id, self.request.user, period)

    @extend_schema(request=GroceryPurchaseCreateSerializer, responses={201: GroceryPurchaseSerializer, 400: ErrorSerializer})
    def create(self, request, *args, **kwargs):
        serializer = GroceryPurchaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        session = build_session(request.user)

        try:
            purchase = GroceryService.record_purchase(
                mess_id=session.mess_id,
                user=request.user,
                items=data['items'],
                total_cost=data['total_cost'],
                date=data.get('date'),
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(GroceryPurchaseSerializer(purchase).data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[PERIOD_PARAMETER], responses={200: GrocerySpentSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def spent(self, request):
        """GET /api/finance/grocery/spent/?period=YYYY-MM"""
        session = build_session(request.user)
        rows = GroceryService.spent_summary(session.mess_id, _period(request))
        return Response(GrocerySpentSerializer(rows, many=True).data)


class ShoppingItemViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    The mess shopping list.

    list: Items still to buy
    create: Add an item
    mark_bought: Tick an item off
    """

    serializer_class = ShoppingItemSerializer
    permission_classes = [IsAuthenticated, IsMessMember]

    def get_queryset(self):
        session = build_session(self.request.user)
        return ShoppingListService.pending_items(session.mess_id)

    @extend_schema(request=ShoppingItemCreateSerializer, responses={201: ShoppingItemSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ShoppingItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = build_session(request.user)

        try:
            item = ShoppingListService.add_item(
                mess_id=session.mess_id,
                user=request.user,
                **serializer.validated_data
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(ShoppingItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: ShoppingItemSerializer, 404: ErrorSerializer})
    @action(detail=True, methods=['post'])
    def mark_bought(self, request, pk=None):
        """POST /api/finance/shopping/{id}/mark_bought/"""
        try:
            item = ShoppingListService.mark_bought(item_id=pk, user=request.user)
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(ShoppingItemSerializer(item).data)


@extend_schema(
    parameters=[PERIOD_PARAMETER],
    responses={200: RentSummarySerializer},
    description="Rent due, paid and remaining per member, with the collection rate.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def rent_summary(request):
    """Rent collection for the caller's mess."""
    session = build_session(request.user)
    summary = RentService.rent_summary(session.mess_id, _period(request))
    return Response(RentSummarySerializer(summary).data)


@extend_schema(
    parameters=[PERIOD_PARAMETER],
    responses={200: RentStatusSerializer},
    description="The caller's own rent status for a month.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def my_rent(request):
    """Rent status of the current user."""
    rent = RentService.rent_status(request.user.mess_membership, _period(request))
    return Response(RentStatusSerializer(rent).data)
