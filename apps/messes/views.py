from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Mess
from .serializers import (
    MessSerializer,
    MessCreateSerializer,
    MessSettingsSerializer,
    MessMemberSerializer,
    JoinMessSerializer,
    UpdateMemberRoleSerializer,
    RemoveMemberSerializer,
    UpdateMemberRentSerializer,
)
from .permissions import IsMessMember, IsMessManager

from apps.messes.services import (
    create_mess,
    join_mess,
    get_mess_for_user,
    update_mess_settings,
    remove_member,
    get_mess_members,
    update_member_role,
    update_member_rent,
    # Exceptions
    MessNotFoundError,
    InvalidJoinCodeError,
    AlreadyInMessError,
    NotMemberError,
    CannotChangeOwnRoleError,
    CannotRemoveSelfError,
    LastManagerError,
    InsufficientPermissionsError,
)


class MessViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for the caller's mess.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: The mess the user belongs to (zero or one entry)
    create: Create a new mess (onboarding)
    retrieve: Get a mess by its code (members only)
    partial_update: Update mess settings (manager only)
    """

    serializer_class = MessSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """Return only the mess the user is a member of."""
        return Mess.objects.filter(
            memberships__user=self.request.user
        ).select_related('manager')

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['partial_update', 'update_member_role', 'remove_member', 'update_member_rent']:
            return [IsAuthenticated(), IsMessManager()]
        if self.action in ['list', 'create']:
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsMessMember()]

    @extend_schema(request=MessCreateSerializer, responses={201: MessSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new mess; the creator becomes its manager."""
        serializer = MessCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            mess = create_mess(
                name=serializer.validated_data['name'],
                user=request.user,
                currency=serializer.validated_data.get('currency'),
            )
        except AlreadyInMessError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = MessSerializer(mess, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=MessSettingsSerializer, responses={200: MessSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Update mess name and currency."""
        serializer = MessSettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            mess = update_mess_settings(
                mess_id=self.kwargs['pk'],
                user=request.user,
                **serializer.validated_data
            )
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(MessSerializer(mess, context={'request': request}).data)

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the mess."""
        mess = self.get_object()
        memberships = get_mess_members(mess_id=mess.id)
        serializer = MessMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @extend_schema(request=UpdateMemberRoleSerializer, responses={200: MessMemberSerializer})
    @action(detail=True, methods=['post'])
    def update_member_role(self, request, pk=None):
        """Update member's role (manager only)."""
        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = update_member_role(
                mess_id=pk,
                user_id=serializer.validated_data['user_id'],
                new_role=serializer.validated_data['role'],
                updated_by=request.user
            )
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (NotMemberError, CannotChangeOwnRoleError, LastManagerError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = MessMemberSerializer(membership)
        return Response(output_serializer.data)

    @extend_schema(request=RemoveMemberSerializer, responses={204: None})
    @action(detail=True, methods=['delete'])
    def remove_member(self, request, pk=None):
        """Remove a member from the mess (manager only)."""
        serializer = RemoveMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_member(
                mess_id=pk,
                user_id=serializer.validated_data['user_id'],
                removed_by=request.user
            )
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (CannotRemoveSelfError, NotMemberError, LastManagerError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=UpdateMemberRentSerializer, responses={200: MessMemberSerializer})
    @action(detail=True, methods=['post'])
    def update_member_rent(self, request, pk=None):
        """Set a member's monthly rent (manager only)."""
        serializer = UpdateMemberRentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = update_member_rent(
                mess_id=pk,
                user_id=serializer.validated_data['user_id'],
                monthly_rent=serializer.validated_data['monthly_rent'],
                updated_by=request.user
            )
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(MessMemberSerializer(membership).data)


@extend_schema(
    request=JoinMessSerializer,
    responses={201: MessMemberSerializer},
    description="Join a mess with its 6-character code (case-insensitive).",
    tags=['messes'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def join(request):
    """Join a mess using its code."""
    serializer = JoinMessSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        membership = join_mess(
            code=serializer.validated_data['code'],
            user=request.user
        )
    except (InvalidJoinCodeError, AlreadyInMessError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    output_serializer = MessMemberSerializer(membership)
    return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: MessSerializer},
    description="Get the mess the current user belongs to.",
    tags=['messes'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_mess(request):
    """Get the current user's mess."""
    try:
        mess = get_mess_for_user(user=request.user)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    serializer = MessSerializer(mess, context={'request': request})
    return Response(serializer.data)
