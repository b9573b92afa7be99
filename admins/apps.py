from django.apps import AppConfig


class AdminsConfig(AppConfig):
    name = 'admins'
    default_auto_field = 'django.db.models.BigAutoField'
    verbose_name = 'Admin accounts'
