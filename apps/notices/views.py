from rest_framework import viewsets, mixins, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.messes.permissions import IsMessMember, IsMessManager
from apps.messes.session import build_session
from .serializers import NoticeSerializer, NoticeCreateSerializer
from .services import (
    post_notice,
    list_notices,
    NotInMessError,
    InsufficientPermissionsError,
)


class NoticeViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Notice board of the caller's mess.

    list: All notices, newest first
    create: Post a notice (manager only)
    """

    serializer_class = NoticeSerializer
    permission_classes = [IsAuthenticated, IsMessMember]

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), IsMessManager()]
        return super().get_permissions()

    def get_queryset(self):
        return list_notices(mess_id=build_session(self.request.user).mess_id)

    @extend_schema(request=NoticeCreateSerializer, responses={201: NoticeSerializer})
    def create(self, request, *args, **kwargs):
        serializer = NoticeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = build_session(request.user)

        try:
            notice = post_notice(
                mess_id=session.mess_id,
                author=request.user,
                **serializer.validated_data
            )
        except (NotInMessError, InsufficientPermissionsError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(NoticeSerializer(notice).data, status=status.HTTP_201_CREATED)
