# mat_core/audit/admin.py
from django.contrib import admin

from mat_core.audit.models import AuditEntry


@admin.register(AuditEntry)
class AuditEntryAdmin(admin.ModelAdmin):
    list_display = ("accion", "entidad", "entidad_id", "usuario", "rol", "fecha_hora", "ip")
    list_filter = ("accion", "entidad")
    search_fields = ("entidad", "entidad_id", "usuario__email")
    readonly_fields = [f.name for f in AuditEntry._meta.fields]
    ordering = ("-fecha_hora",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
