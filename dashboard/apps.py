import time

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    name = 'dashboard'
    default_auto_field = 'django.db.models.BigAutoField'
    started_at = None

    def ready(self):
        # Reference point for the uptime reported by system-health
        self.started_at = time.monotonic()
