from rest_framework import permissions

from .models import Mess


def _mess_of(obj):
    # obj is a Mess or anything carrying a mess
    return obj if isinstance(obj, Mess) else obj.mess


class IsMessMember(permissions.BasePermission):
    """
    Permission: User must belong to a mess (and to the object's mess).
    """
    message = 'You are not a member of any mess'

    def has_permission(self, request, view):
        return request.user.mess_membership is not None

    def has_object_permission(self, request, view, obj):
        return _mess_of(obj).has_member(request.user)


class IsMessManager(permissions.BasePermission):
    """
    Permission: User must be a manager of their mess (and of the object's mess).
    """
    message = 'Only mess managers can perform this action'

    def has_permission(self, request, view):
        membership = request.user.mess_membership
        return membership is not None and membership.is_manager

    def has_object_permission(self, request, view, obj):
        return _mess_of(obj).is_manager(request.user)
