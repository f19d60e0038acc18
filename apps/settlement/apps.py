from django.apps import AppConfig


class SettlementConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.settlement'
    label = 'settlement'

    def ready(self):
        # Publish recomputed stats whenever month data changes
        from . import signals  # noqa: F401
