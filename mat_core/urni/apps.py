from django.apps import AppConfig


class UrniConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mat_core.urni"
    verbose_name = "URNI"
