from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = 'core'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        from .uploads import ensure_upload_dirs

        ensure_upload_dirs()
