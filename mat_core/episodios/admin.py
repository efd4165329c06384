# mat_core/episodios/admin.py
from django.contrib import admin

from mat_core.episodios.models import EpisodioMadre


@admin.register(EpisodioMadre)
class EpisodioMadreAdmin(admin.ModelAdmin):
    list_display = ("madre", "estado", "fecha_ingreso", "fecha_alta")
    list_filter = ("estado",)
    search_fields = ("madre__rut", "madre__nombres", "madre__apellidos")
    autocomplete_fields = ("madre",)
    readonly_fields = ("created_at", "updated_at", "created_by", "updated_by")
    ordering = ("-fecha_ingreso",)
