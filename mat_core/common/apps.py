from django.apps import AppConfig


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mat_core.common"

    def ready(self):
        import mat_core.common.signals  # noqa: F401
