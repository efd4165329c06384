# mat_core/recien_nacidos/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from mat_core.recien_nacidos.models import RecienNacido, Sexo


def get_recien_nacido(*, rn_id) -> RecienNacido:
    return RecienNacido.objects.select_related("parto", "parto__madre").get(id=rn_id)


def search_recien_nacidos(*, q: str | None = None, parto_id=None) -> QuerySet[RecienNacido]:
    qs = RecienNacido.objects.select_related("parto", "parto__madre")

    if parto_id:
        qs = qs.filter(parto_id=parto_id)

    qv = (q or "").strip()
    if qv:
        cond = (
            Q(parto__madre__rut__icontains=qv)
            | Q(parto__madre__nombres__icontains=qv)
            | Q(parto__madre__apellidos__icontains=qv)
            | Q(observaciones__icontains=qv)
        )
        # sexo only on an exact enum match
        if qv.upper() in Sexo.values:
            cond |= Q(sexo=qv.upper())
        qs = qs.filter(cond)

    return qs.order_by("-created_at", "id")
