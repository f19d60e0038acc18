"""Profile management service."""

from typing import Optional

from django.contrib.auth import get_user_model

User = get_user_model()


def update_profile(
    *,
    user: User,
    display_name: Optional[str] = None,
    phone: Optional[str] = None
) -> User:
    """Update the editable parts of a user's own profile."""
    update_fields = []

    if display_name is not None:
        user.display_name = display_name
        update_fields.append('display_name')

    if phone is not None:
        user.phone = phone
        update_fields.append('phone')

    if update_fields:
        user.save(update_fields=update_fields)

    return user
