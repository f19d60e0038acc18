"""
Messes app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    MessesServiceError,
    MessNotFoundError,
    InvalidJoinCodeError,
    AlreadyInMessError,
    NotMemberError,
    CannotChangeOwnRoleError,
    CannotRemoveSelfError,
    LastManagerError,
    InsufficientPermissionsError,
)

from .mess_management import (
    create_mess,
    get_mess_by_id,
    get_mess_for_user,
    update_mess_settings,
)

from .membership_management import (
    join_mess,
    remove_member,
    get_mess_members,
    update_member_rent,
)

from .role_management import (
    update_member_role,
)


__all__ = [
    # Exceptions
    'MessesServiceError',
    'MessNotFoundError',
    'InvalidJoinCodeError',
    'AlreadyInMessError',
    'NotMemberError',
    'CannotChangeOwnRoleError',
    'CannotRemoveSelfError',
    'LastManagerError',
    'InsufficientPermissionsError',

    # Mess management
    'create_mess',
    'get_mess_by_id',
    'get_mess_for_user',
    'update_mess_settings',

    # Membership management
    'join_mess',
    'remove_member',
    'get_mess_members',
    'update_member_rent',

    # Role management
    'update_member_role',
]
