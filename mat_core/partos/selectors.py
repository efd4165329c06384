# mat_core/partos/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from mat_core.partos.models import LugarParto, Parto, TipoParto


def _with_relations(qs: QuerySet[Parto]) -> QuerySet[Parto]:
    return qs.select_related("madre").prefetch_related(
        "matronas__profile", "medicos__profile", "enfermeras__profile"
    )


def get_parto(*, parto_id) -> Parto:
    return _with_relations(Parto.objects.all()).get(id=parto_id)


def search_partos(*, q: str | None = None, madre_id=None) -> QuerySet[Parto]:
    qs = Parto.objects.all()

    if madre_id:
        qs = qs.filter(madre_id=madre_id)

    qv = (q or "").strip()
    if qv:
        cond = (
            Q(madre__rut__icontains=qv)
            | Q(madre__nombres__icontains=qv)
            | Q(madre__apellidos__icontains=qv)
            | Q(lugar_detalle__icontains=qv)
        )
        # enum values match by substring too ("CESAREA" -> both caesarean types)
        upper = qv.upper()
        tipos = [t for t in TipoParto.values if upper in t]
        lugares = [lg for lg in LugarParto.values if upper in lg]
        if tipos:
            cond |= Q(tipo__in=tipos)
        if lugares:
            cond |= Q(lugar__in=lugares)
        qs = qs.filter(cond)

    return _with_relations(qs).order_by("-fecha_hora", "id")
