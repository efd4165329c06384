from django.apps import AppConfig


class EpisodiosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "mat_core.episodios"
