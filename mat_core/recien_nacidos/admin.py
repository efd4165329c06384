# mat_core/recien_nacidos/admin.py
from django.contrib import admin

from mat_core.recien_nacidos.models import RecienNacido


@admin.register(RecienNacido)
class RecienNacidoAdmin(admin.ModelAdmin):
    list_display = ("parto", "sexo", "peso_nacimiento_gramos", "apgar_1_min", "apgar_5_min", "created_at")
    list_filter = ("sexo", "es_nacido_vivo")
    search_fields = ("parto__madre__rut", "parto__madre__apellidos")
    readonly_fields = ("created_at", "updated_at", "created_by", "updated_by")
