# mat_core/partos/admin.py
from django.contrib import admin

from mat_core.partos.models import Parto


@admin.register(Parto)
class PartoAdmin(admin.ModelAdmin):
    list_display = ("fecha_hora", "tipo", "lugar", "madre", "created_at")
    list_filter = ("tipo", "lugar")
    search_fields = ("madre__rut", "madre__nombres", "madre__apellidos")
    autocomplete_fields = ("madre",)
    filter_horizontal = ("matronas", "medicos", "enfermeras")
    readonly_fields = ("created_at", "updated_at", "created_by", "updated_by")
    ordering = ("-fecha_hora",)
