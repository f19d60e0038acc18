# ==========================================
# apps/meals/models.py
# ==========================================

from django.db import models
import uuid


class MealType(models.TextChoices):
    BREAKFAST = 'breakfast', 'Breakfast'
    LUNCH = 'lunch', 'Lunch'
    DINNER = 'dinner', 'Dinner'


class MealRecord(models.Model):
    """One member's meals on one day. Created on first toggle, never deleted."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='meal_records')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='meal_records')
    date = models.DateField()
    breakfast = models.BooleanField(default=False)
    lunch = models.BooleanField(default=False)
    dinner = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'meal_records'
        constraints = [
            models.UniqueConstraint(fields=['user', 'date'], name='unique_meal_per_user_day'),
        ]
        indexes = [
            models.Index(fields=['mess', 'date'], name='meal_mess_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.user.get_display_name()} on {self.date} ({self.meal_count})"

    @property
    def meal_count(self):
        return int(self.breakfast) + int(self.lunch) + int(self.dinner)
