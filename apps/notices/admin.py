from django.contrib import admin
from .models import Notice


@admin.register(Notice)
class NoticeAdmin(admin.ModelAdmin):
    list_display = ['title', 'mess', 'priority', 'author', 'created_at']
    list_filter = ['priority']
    search_fields = ['title', 'content', 'mess__name']
    readonly_fields = ['id', 'created_at']
