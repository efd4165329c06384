# mat_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.iam.models import Role


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class DevLoginRequestSerializer(serializers.Serializer):
    userId = serializers.IntegerField(required=False)
    email = serializers.CharField(required=False)

    def validate(self, attrs):
        if not attrs.get("userId") and not attrs.get("email"):
            raise serializers.ValidationError("userId o email es requerido")
        return attrs


class SessionUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.CharField()
    nombre = serializers.CharField()
    rut = serializers.CharField(allow_null=True)
    roles = serializers.ListField(child=serializers.CharField())
    permissions = serializers.ListField(child=serializers.CharField())


class RoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = ["id", "name", "description"]
        read_only_fields = fields


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    email = serializers.CharField(read_only=True)
    nombre = serializers.SerializerMethodField()
    rut = serializers.SerializerMethodField()
    activo = serializers.BooleanField(source="is_active", read_only=True)
    roles = serializers.SerializerMethodField()

    def _profile(self, obj):
        return getattr(obj, "profile", None)

    def get_nombre(self, obj) -> str:
        profile = self._profile(obj)
        return profile.nombre if profile else obj.get_username()

    def get_rut(self, obj) -> str | None:
        profile = self._profile(obj)
        return profile.rut if profile else None

    def get_roles(self, obj) -> list[str]:
        return sorted(ur.role.name for ur in obj.user_roles.all())


class StaffSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    nombre = serializers.CharField(source="profile.nombre", read_only=True)
    email = serializers.CharField(read_only=True)
    rut = serializers.CharField(source="profile.rut", read_only=True, allow_null=True)


class UserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    nombre = serializers.CharField(max_length=200)
    rut = serializers.CharField(max_length=12, required=False, allow_blank=True, allow_null=True)
    roles = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    activo = serializers.BooleanField(required=False, default=True)


class UserUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PUT/PATCH both partial).
    """
    email = serializers.EmailField(required=False)
    password = serializers.CharField(required=False, trim_whitespace=False)
    nombre = serializers.CharField(max_length=200, required=False)
    rut = serializers.CharField(max_length=12, required=False, allow_blank=True, allow_null=True)
    roles = serializers.ListField(child=serializers.CharField(), required=False)
    activo = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Debe indicar al menos un campo")
        return attrs
