# mat_core/audit/api/serializers.py
from rest_framework import serializers

from mat_core.audit.models import AuditEntry


class AuditUserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    nombre = serializers.SerializerMethodField()
    email = serializers.CharField(read_only=True)
    rut = serializers.SerializerMethodField()

    def _profile(self, user):
        return getattr(user, "profile", None)

    def get_nombre(self, user) -> str | None:
        profile = self._profile(user)
        return profile.nombre if profile else None

    def get_rut(self, user) -> str | None:
        profile = self._profile(user)
        return profile.rut if profile else None


class AuditEntrySerializer(serializers.ModelSerializer):
    usuarioId = serializers.IntegerField(source="usuario_id", read_only=True)
    usuario = AuditUserSerializer(read_only=True)
    entidadId = serializers.CharField(source="entidad_id", read_only=True)
    detalleBefore = serializers.JSONField(source="detalle_before", read_only=True)
    detalleAfter = serializers.JSONField(source="detalle_after", read_only=True)
    fechaHora = serializers.DateTimeField(source="fecha_hora", read_only=True)
    userAgent = serializers.CharField(source="user_agent", read_only=True)

    class Meta:
        model = AuditEntry
        fields = [
            "id",
            "usuarioId",
            "usuario",
            "rol",
            "entidad",
            "entidadId",
            "accion",
            "detalleBefore",
            "detalleAfter",
            "fechaHora",
            "ip",
            "userAgent",
        ]
        read_only_fields = fields
