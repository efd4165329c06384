from django.apps import AppConfig


class RecienNacidosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mat_core.recien_nacidos"
