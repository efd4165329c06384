# mat_core/audit/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from mat_core.audit.models import AuditEntry


def list_audit_entries() -> QuerySet[AuditEntry]:
    return AuditEntry.objects.select_related("usuario", "usuario__profile").order_by("-fecha_hora", "-id")
