from django.db import models
import uuid


class NoticePriority(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'


class Notice(models.Model):
    """Announcement on a mess notice board. Append-only."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='notices')
    author = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='notices'
    )
    title = models.CharField(max_length=200)
    content = models.TextField()
    priority = models.CharField(
        max_length=10,
        choices=NoticePriority.choices,
        default=NoticePriority.MEDIUM
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notices'
        indexes = [
            models.Index(fields=['mess', '-created_at'], name='notice_mess_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.priority})"
