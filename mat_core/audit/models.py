# mat_core/audit/models.py
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class AuditAction:
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    PERMISSION_DENIED = "PERMISSION_DENIED"


class AuditEntryQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise ValidationError("AuditEntry is immutable and cannot be modified once created.")

    def delete(self):
        raise ValidationError("AuditEntry is immutable and cannot be deleted.")


class AuditEntry(models.Model):
    """
    Immutable audit record.
    accion is open-ended (see AuditAction for the tags in use).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="audit_entries",
        null=True,
        blank=True,
    )
    rol = models.CharField(max_length=255, null=True, blank=True)  # "matrona, medico"

    entidad = models.CharField(max_length=64, db_index=True)  # e.g. "Madre", "EpisodioURNI"
    entidad_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    accion = models.CharField(max_length=32, db_index=True)

    detalle_before = models.JSONField(null=True, blank=True)
    detalle_after = models.JSONField(null=True, blank=True)

    fecha_hora = models.DateTimeField(auto_now_add=True, db_index=True)
    ip = models.CharField(max_length=255, null=True, blank=True)
    user_agent = models.CharField(max_length=500, null=True, blank=True)

    objects = AuditEntryQuerySet.as_manager()

    class Meta:
        db_table = "audit_entry"
        indexes = [
            models.Index(fields=["entidad", "entidad_id"]),
            models.Index(fields=["usuario", "fecha_hora"]),
        ]

    def __str__(self):
        return f"{self.accion} {self.entidad} @ {self.fecha_hora}"

    def save(self, *args, **kwargs):
        # UUID PK exists even before first save, so use _state.adding
        if not self._state.adding:
            raise ValidationError("AuditEntry is immutable and cannot be modified once created.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("AuditEntry is immutable and cannot be deleted.")
