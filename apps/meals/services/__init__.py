"""
Meals app services layer.

Meal toggling is an upsert on the (user, day) record; the daily tracker
reads month totals through the settlement store adapter.
"""

from .exceptions import (
    MealsServiceError,
    NotInMessError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidMealTypeError,
)

from .meal_tracking import (
    toggle_meal,
    list_meals,
)

from .daily_tracker import (
    daily_tracker,
)


__all__ = [
    # Exceptions
    'MealsServiceError',
    'NotInMessError',
    'NotMemberError',
    'InsufficientPermissionsError',
    'InvalidMealTypeError',

    # Meal tracking
    'toggle_meal',
    'list_meals',

    # Daily tracker
    'daily_tracker',
]
