# mat_core/informes/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from mat_core.common.models import EpisodeStatus
from mat_core.episodios.models import EpisodioMadre
from mat_core.informes.models import InformeAlta
from mat_core.partos.models import Parto


def _with_relations(qs: QuerySet[InformeAlta]) -> QuerySet[InformeAlta]:
    return qs.select_related(
        "episodio",
        "episodio__madre",
        "parto",
        "generado_por",
        "generado_por__profile",
    ).prefetch_related("parto__recien_nacidos")


def list_informes() -> QuerySet[InformeAlta]:
    return _with_relations(InformeAlta.objects.all()).order_by("-fecha_generacion", "id")


def get_informe_by_episodio(*, episodio_id) -> InformeAlta:
    return _with_relations(InformeAlta.objects.all()).get(episodio_id=episodio_id)


def episodios_pendientes_de_informe() -> QuerySet[EpisodioMadre]:
    return (
        EpisodioMadre.objects.filter(estado=EpisodeStatus.INGRESADO, informe_alta__isnull=True)
        .select_related("madre")
        .order_by("-fecha_ingreso", "id")
    )


def partos_candidatos(episodio: EpisodioMadre) -> QuerySet[Parto]:
    """
    Births of the episode's mother inside the stay that no report covers yet.
    """
    qs = Parto.objects.filter(
        madre_id=episodio.madre_id,
        fecha_hora__gte=episodio.fecha_ingreso,
        informes__isnull=True,
    )
    if episodio.fecha_alta:
        qs = qs.filter(fecha_hora__lte=episodio.fecha_alta)
    return qs.prefetch_related("recien_nacidos").order_by("-fecha_hora").distinct()


def episodios_con_informe() -> QuerySet[EpisodioMadre]:
    return (
        EpisodioMadre.objects.filter(informe_alta__isnull=False)
        .select_related("madre", "informe_alta")
        .order_by("-fecha_ingreso", "id")
    )
