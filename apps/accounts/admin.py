from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Staff view of accounts, with the mess each one belongs to."""

    list_display = ['email', 'display_name', 'mess_code', 'mess_role', 'email_verified', 'is_active', 'last_login']
    list_filter = ['is_active', 'email_verified', 'membership__role']
    list_select_related = ['membership']
    search_fields = ['email', 'display_name', 'phone', 'membership__mess__id']
    ordering = ['email']
    readonly_fields = ['created_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('display_name', 'phone')}),
        ('Email confirmation', {'fields': ('email_verified', 'verification_token')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Activity', {'fields': ('created_at', 'last_login'), 'classes': ('collapse',)}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    @admin.display(description='Mess')
    def mess_code(self, obj):
        membership = obj.mess_membership
        return membership.mess_id if membership else '-'

    @admin.display(description='Role')
    def mess_role(self, obj):
        membership = obj.mess_membership
        return membership.get_role_display() if membership else '-'

    @admin.action(description='Mark emails as verified')
    def verify_emails(self, request, queryset):
        count = queryset.update(email_verified=True, verification_token=None)
        self.message_user(request, f'Verified {count} account(s).')

    actions = ['verify_emails']
