from django.apps import AppConfig


class MadresConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mat_core.madres"
