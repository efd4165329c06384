# mat_core/audit/filters.py
from __future__ import annotations

from datetime import datetime, time, timedelta

import django_filters
from django.utils import timezone

from mat_core.audit.models import AuditEntry


def _aware(dt: datetime) -> datetime:
    return timezone.make_aware(dt) if timezone.is_naive(dt) else dt


class AuditEntryFilter(django_filters.FilterSet):
    """
    Query params: usuarioId, entidad, accion, fechaInicio, fechaFin.
    fechaFin is inclusive through the end of that day.
    """
    usuarioId = django_filters.NumberFilter(field_name="usuario_id")
    entidad = django_filters.CharFilter(field_name="entidad")
    accion = django_filters.CharFilter(field_name="accion")
    fechaInicio = django_filters.DateFilter(method="filter_fecha_inicio")
    fechaFin = django_filters.DateFilter(method="filter_fecha_fin")

    class Meta:
        model = AuditEntry
        fields = []

    def filter_fecha_inicio(self, queryset, name, value):
        return queryset.filter(fecha_hora__gte=_aware(datetime.combine(value, time.min)))

    def filter_fecha_fin(self, queryset, name, value):
        next_day = _aware(datetime.combine(value + timedelta(days=1), time.min))
        return queryset.filter(fecha_hora__lt=next_day)
