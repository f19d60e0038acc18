from django.contrib import admin
from .models import MealRecord


@admin.register(MealRecord)
class MealRecordAdmin(admin.ModelAdmin):
    list_display = ['user', 'mess', 'date', 'breakfast', 'lunch', 'dinner']
    list_filter = ['date', 'breakfast', 'lunch', 'dinner']
    search_fields = ['user__email', 'user__display_name', 'mess__name']
    date_hierarchy = 'date'
