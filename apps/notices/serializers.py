from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Notice, NoticePriority


class NoticeSerializer(serializers.ModelSerializer):
    author = UserPublicSerializer(read_only=True)

    class Meta:
        model = Notice
        fields = ['id', 'title', 'content', 'priority', 'author', 'created_at']
        read_only_fields = fields


class NoticeCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    content = serializers.CharField()
    priority = serializers.ChoiceField(choices=NoticePriority.choices, default=NoticePriority.MEDIUM)
