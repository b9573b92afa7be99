from django.apps import AppConfig


class IdCardsConfig(AppConfig):
    name = 'id_cards'
    default_auto_field = 'django.db.models.BigAutoField'
    verbose_name = 'ID cards'
