# mat_core/urni/admin.py
from django.contrib import admin

from mat_core.urni.models import EpisodioURNI


@admin.register(EpisodioURNI)
class EpisodioURNIAdmin(admin.ModelAdmin):
    list_display = ("recien_nacido", "estado", "servicio_unidad", "fecha_hora_ingreso", "fecha_hora_alta")
    list_filter = ("estado", "servicio_unidad")
    search_fields = ("recien_nacido__parto__madre__rut", "recien_nacido__parto__madre__apellidos")
    readonly_fields = ("created_at", "updated_at", "created_by", "updated_by")
    ordering = ("-fecha_hora_ingreso",)
