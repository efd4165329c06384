# mat_core/urni/selectors.py
from __future__ import annotations

import uuid

from django.db.models import Q, QuerySet

from mat_core.urni.models import EpisodioURNI


def _with_relations(qs: QuerySet[EpisodioURNI]) -> QuerySet[EpisodioURNI]:
    return qs.select_related(
        "recien_nacido",
        "recien_nacido__parto",
        "recien_nacido__parto__madre",
        "responsable_clinico",
        "responsable_clinico__profile",
    )


def get_episodio_urni(*, episodio_id) -> EpisodioURNI:
    return _with_relations(EpisodioURNI.objects.all()).get(id=episodio_id)


def _as_uuid(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def search_episodios_urni(
    *,
    estado: str | None = None,
    rn_id=None,
    responsable_id=None,
    q: str | None = None,
) -> QuerySet[EpisodioURNI]:
    qs = EpisodioURNI.objects.all()

    if estado:
        qs = qs.filter(estado=estado)
    if rn_id:
        qs = qs.filter(recien_nacido_id=rn_id)
    if responsable_id:
        qs = qs.filter(responsable_clinico_id=responsable_id)

    qv = (q or "").strip()
    if qv:
        cond = (
            Q(recien_nacido__parto__madre__rut__icontains=qv)
            | Q(recien_nacido__parto__madre__nombres__icontains=qv)
            | Q(recien_nacido__parto__madre__apellidos__icontains=qv)
        )
        rn_uuid = _as_uuid(qv)
        if rn_uuid is not None:
            cond |= Q(recien_nacido_id=rn_uuid)
        qs = qs.filter(cond)

    return _with_relations(qs).order_by("-fecha_hora_ingreso", "id")
