import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.messes.models import Mess
from apps.messes.permissions import IsMessMember
from apps.messes.session import build_session
from .exceptions import SettlementError
from .serializers import (
    PeriodQuerySerializer,
    OverviewSerializer,
    BalanceSheetSerializer,
    ErrorSerializer,
)
from .snapshots import load_month

logger = logging.getLogger(__name__)

PERIOD_PARAMETER = OpenApiParameter(
    'period', OpenApiTypes.STR, description='Month period (YYYY-MM), defaults to the current month'
)


def _load(request):
    session = build_session(request.user)
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    period = query_serializer.validated_data['period']
    currency = Mess.objects.values_list('currency', flat=True).get(id=session.mess_id)
    return session, period, currency, load_month(session.mess_id, period)


@extend_schema(
    parameters=[PERIOD_PARAMETER],
    responses={200: OverviewSerializer, 400: ErrorSerializer},
    description="Meal rate, totals and every member's balance for a month.",
    tags=['settlement'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def overview(request):
    """Monthly overview for the caller's mess - thin HTTP handler."""
    try:
        session, period, currency, snapshot = _load(request)
        stats = snapshot.stats()
    except SettlementError as e:
        logger.error("Could not compute overview for user %s: %s", request.user.id, e)
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    data = {
        'period': str(period),
        'currency': currency,
        'stats': stats,
        'me': stats.member(session.uid) if stats else None,
    }
    return Response(OverviewSerializer(data).data)


@extend_schema(
    parameters=[PERIOD_PARAMETER],
    responses={200: BalanceSheetSerializer, 400: ErrorSerializer},
    description="Per-member breakdown of deposits, paid expenses and meal cost for a month.",
    tags=['settlement'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def balance_sheet(request):
    """Monthly balance sheet for the caller's mess - thin HTTP handler."""
    try:
        session, period, currency, snapshot = _load(request)
        sheet = snapshot.balance_sheet()
    except SettlementError as e:
        logger.error("Could not compute balance sheet for user %s: %s", request.user.id, e)
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    data = {
        'period': str(period),
        'currency': currency,
        'stats': sheet.stats if sheet else None,
        'details': sheet.details if sheet else [],
    }
    return Response(BalanceSheetSerializer(data).data)
