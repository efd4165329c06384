# mat_core/episodios/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from mat_core.episodios.models import EpisodioMadre
from mat_core.partos.models import Parto


def get_episodio(*, episodio_id) -> EpisodioMadre:
    return EpisodioMadre.objects.select_related(
        "madre", "created_by__profile", "updated_by__profile"
    ).get(id=episodio_id)


def search_episodios(*, q: str | None = None, estado: str | None = None) -> QuerySet[EpisodioMadre]:
    qs = EpisodioMadre.objects.select_related("madre")

    if estado:
        qs = qs.filter(estado=estado)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(madre__rut__icontains=qv)
            | Q(madre__nombres__icontains=qv)
            | Q(madre__apellidos__icontains=qv)
            | Q(motivo_ingreso__icontains=qv)
            | Q(hospital_anterior__icontains=qv)
        )

    return qs.order_by("-fecha_ingreso", "id")


def partos_with_newborns(*, madre_id) -> QuerySet[Parto]:
    return (
        Parto.objects.filter(madre_id=madre_id)
        .prefetch_related("recien_nacidos")
        .order_by("-fecha_hora")
    )
