# mat_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from mat_core.iam.models import Permission, Role, RolePermission, UserPermission, UserProfile, UserRole


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    list_display = ("code", "description")
    search_fields = ("code", "description")
    ordering = ("code",)


class RolePermissionInline(admin.TabularInline):
    model = RolePermission
    extra = 0
    autocomplete_fields = ("permission",)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "description", "is_system")
    list_filter = ("is_system",)
    search_fields = ("name", "description")
    inlines = [RolePermissionInline]
    ordering = ("name",)


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ("user", "role")
    list_filter = ("role",)
    search_fields = ("user__email",)


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("nombre", "rut", "user", "created_at", "updated_at")
    search_fields = ("nombre", "rut", "user__email")
    autocomplete_fields = ("user",)
    ordering = ("nombre",)


@admin.register(UserPermission)
class UserPermissionAdmin(admin.ModelAdmin):
    list_display = ("user", "permission")
    search_fields = ("user__email", "permission__code")
    autocomplete_fields = ("user", "permission")
