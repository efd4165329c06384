# mat_core/madres/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from mat_core.madres.models import Madre


def get_madre(*, madre_id) -> Madre:
    return Madre.objects.get(id=madre_id)


def search_madres(*, q: str | None = None) -> QuerySet[Madre]:
    qs = Madre.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(rut__icontains=qv)
            | Q(nombres__icontains=qv)
            | Q(apellidos__icontains=qv)
            | Q(ficha_clinica__icontains=qv)
        )

    return qs.order_by("apellidos", "nombres", "id")
