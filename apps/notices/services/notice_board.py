import logging

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.messes.models import Mess
from apps.notices.models import Notice, NoticePriority

from .exceptions import NotInMessError, InsufficientPermissionsError

logger = logging.getLogger(__name__)


def post_notice(
    *,
    mess_id: str,
    author: User,
    title: str,
    content: str,
    priority: str = NoticePriority.MEDIUM
) -> Notice:
    """
    Post a notice to the mess board (manager only).

    Raises:
        NotInMessError: If author is not in the mess
        InsufficientPermissionsError: If author is not a manager
    """
    mess = Mess.objects.filter(id=mess_id).first()
    if mess is None or not mess.has_member(author):
        raise NotInMessError("You are not a member of this mess")
    if not mess.is_manager(author):
        logger.warning("User %s tried to post a notice in mess %s", author.id, mess.id)
        raise InsufficientPermissionsError("Only managers can post notices")

    notice = Notice.objects.create(
        mess=mess,
        author=author,
        title=title,
        content=content,
        priority=priority,
    )
    logger.info("Notice %s posted in mess %s by %s", notice.id, mess.id, author.id)
    return notice


def list_notices(*, mess_id: str) -> QuerySet[Notice]:
    """Newest first."""
    return Notice.objects.filter(mess_id=mess_id).select_related('author').order_by('-created_at')
