from django.apps import AppConfig


class PartosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mat_core.partos"
