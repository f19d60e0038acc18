from django.contrib import admin
from django.db.models import Count

from apps.messes.models import Mess, MessMembership


class MembershipInline(admin.TabularInline):
    model = MessMembership
    extra = 0
    fields = ['user', 'role', 'monthly_rent', 'joined_at']
    readonly_fields = ['joined_at']
    autocomplete_fields = ['user']


@admin.register(Mess)
class MessAdmin(admin.ModelAdmin):
    """Messes keyed by join code, with their residents inline."""

    list_display = ['id', 'name', 'manager', 'residents', 'currency', 'created_at']
    list_filter = ['currency']
    search_fields = ['id', 'name', 'manager__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [MembershipInline]
    fieldsets = (
        (None, {'fields': ('id', 'name', 'manager', 'currency')}),
        # Stored for old clients; balances always use the computed rate
        ('Legacy rate', {'fields': ('legacy_meal_rate',), 'classes': ('collapse',)}),
        ('Timestamps', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(resident_count=Count('memberships'))

    @admin.display(description='Residents', ordering='resident_count')
    def residents(self, obj):
        return obj.resident_count


@admin.register(MessMembership)
class MessMembershipAdmin(admin.ModelAdmin):
    list_display = ['user', 'mess', 'role', 'monthly_rent', 'joined_at']
    list_filter = ['role']
    list_select_related = ['user', 'mess']
    search_fields = ['user__email', 'user__display_name', 'mess__id', 'mess__name']
    readonly_fields = ['joined_at']
    ordering = ['mess', 'role', 'joined_at']
