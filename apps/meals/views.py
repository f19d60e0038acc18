from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.messes.permissions import IsMessMember
from apps.messes.session import build_session
from apps.settlement.exceptions import SettlementError
from apps.settlement.serializers import ErrorSerializer
from .serializers import (
    ToggleMealSerializer,
    TrackerQuerySerializer,
    MealRangeQuerySerializer,
    MealRecordSerializer,
    DailyTrackerSerializer,
)
from .services import (
    toggle_meal,
    list_meals,
    daily_tracker,
    NotInMessError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidMealTypeError,
)


@extend_schema(
    request=ToggleMealSerializer,
    responses={200: MealRecordSerializer, 400: ErrorSerializer, 403: ErrorSerializer},
    description="Mark a meal as taken or not taken. Managers may change anyone's meals.",
    tags=['meals'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsMessMember])
def toggle(request):
    """Upsert one meal flag - thin HTTP handler."""
    serializer = ToggleMealSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    session = build_session(request.user)

    try:
        record = toggle_meal(
            mess_id=session.mess_id,
            actor=request.user,
            user_id=data.get('user_id', session.uid),
            day=data['date'],
            meal_type=data['meal_type'],
            taken=data['taken'],
        )
    except (NotInMessError, InsufficientPermissionsError) as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except (NotMemberError, InvalidMealTypeError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(MealRecordSerializer(record).data)


@extend_schema(
    parameters=[
        OpenApiParameter('date', OpenApiTypes.DATE, description='Day (YYYY-MM-DD), defaults to today'),
    ],
    responses={200: DailyTrackerSerializer, 400: ErrorSerializer},
    description="Every member's meals for a day with month totals and billing summary.",
    tags=['meals'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def tracker(request):
    """Daily meal tracker for the caller's mess."""
    query_serializer = TrackerQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    day = query_serializer.validated_data.get('date') or timezone.localdate()
    session = build_session(request.user)

    try:
        data = daily_tracker(mess_id=session.mess_id, day=day)
    except SettlementError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(DailyTrackerSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('start', OpenApiTypes.DATE, description='First day (YYYY-MM-DD)'),
        OpenApiParameter('end', OpenApiTypes.DATE, description='Last day (YYYY-MM-DD)'),
        OpenApiParameter('user', OpenApiTypes.UUID, description='Only this member'),
    ],
    responses={200: MealRecordSerializer(many=True)},
    description="Meal records of the caller's mess in a date range.",
    tags=['meals'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def meal_list(request):
    """List meal records."""
    query_serializer = MealRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    session = build_session(request.user)

    records = list_meals(
        mess_id=session.mess_id,
        start=params['start'],
        end=params['end'],
        user_id=params.get('user'),
    )
    return Response(MealRecordSerializer(records, many=True).data)
