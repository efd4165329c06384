# mat_core/informes/admin.py
from django.contrib import admin

from mat_core.informes.models import InformeAlta


@admin.register(InformeAlta)
class InformeAltaAdmin(admin.ModelAdmin):
    list_display = ("episodio", "parto", "formato", "generado_por", "fecha_generacion")
    list_filter = ("formato",)
    search_fields = ("episodio__madre__rut", "episodio__madre__apellidos")
    readonly_fields = ("fecha_generacion", "contenido")
