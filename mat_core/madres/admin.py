# mat_core/madres/admin.py
from django.contrib import admin

from mat_core.madres.models import Madre


@admin.register(Madre)
class MadreAdmin(admin.ModelAdmin):
    list_display = ("rut", "nombres", "apellidos", "edad", "ficha_clinica", "created_at")
    search_fields = ("rut", "nombres", "apellidos", "ficha_clinica")
    readonly_fields = ("created_at", "updated_at", "created_by", "updated_by")
    ordering = ("apellidos", "nombres")
