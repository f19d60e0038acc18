"""Notices app services layer."""

from .exceptions import (
    NoticesServiceError,
    NotInMessError,
    InsufficientPermissionsError,
)

from .notice_board import (
    post_notice,
    list_notices,
)


__all__ = [
    'NoticesServiceError',
    'NotInMessError',
    'InsufficientPermissionsError',
    'post_notice',
    'list_notices',
]
