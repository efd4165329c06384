# mat_core/dashboard/pages.py
"""
Page catalogue: which permission opens each dashboard page, which
capabilities it shows and the first page of rows it lists.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from mat_core.audit.selectors import list_audit_entries
from mat_core.episodios.selectors import search_episodios
from mat_core.iam.gate import Required
from mat_core.iam.selectors import list_users
from mat_core.informes.selectors import episodios_con_informe, episodios_pendientes_de_informe
from mat_core.madres.selectors import search_madres
from mat_core.partos.selectors import search_partos
from mat_core.recien_nacidos.selectors import search_recien_nacidos
from mat_core.urni.selectors import search_episodios_urni

PAGE_ROWS = 20


@dataclass(frozen=True)
class Page:
    slug: str
    title: str
    required: Required
    rows: Callable[[str], object] | None = None
    # capability name -> codes (any of them grants it)
    capabilities: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def template(self) -> str:
        return f"dashboard/{self.slug}.html"


PAGES: dict[str, Page] = {
    p.slug: p
    for p in (
        Page(
            slug="madres",
            title="Madres",
            required=["madre:view", "madre:view_limited"],
            rows=lambda q: search_madres(q=q),
            capabilities={
                "create": ("madre:create", "madre:create_limited"),
                "update": ("madre:update", "madre:update_limited"),
                "delete": ("madre:delete", "madre:delete_limited"),
            },
        ),
        Page(
            slug="partos",
            title="Partos",
            required="parto:view",
            rows=lambda q: search_partos(q=q),
            capabilities={
                "create": ("parto:create",),
                "update": ("parto:update",),
                "delete": ("parto:delete",),
            },
        ),
        Page(
            slug="recien-nacidos",
            title="Recién nacidos",
            required="recien-nacido:view",
            rows=lambda q: search_recien_nacidos(q=q),
            capabilities={
                "create": ("recien-nacido:create",),
                "update": ("recien-nacido:update",),
                "delete": ("recien-nacido:delete",),
            },
        ),
        Page(
            slug="urni",
            title="Episodios URNI",
            required=["urni:read", "urni:episodio:view", "urni:episodio:create"],
            rows=lambda q: search_episodios_urni(q=q),
            capabilities={
                "create": ("urni:episodio:create",),
                "update": ("urni:episodio:update",),
                "alta": ("alta:manage",),
            },
        ),
        Page(
            slug="ingreso-alta",
            title="Ingreso / Alta",
            required=["ingreso_alta:view", "ingreso_alta:manage"],
            rows=lambda q: search_episodios(q=q),
            capabilities={
                "create": ("ingreso_alta:create", "ingreso_alta:manage"),
                "update": ("ingreso_alta:update", "ingreso_alta:manage"),
                "alta": ("ingreso_alta:alta", "ingreso_alta:manage"),
            },
        ),
        Page(
            slug="informe-alta",
            title="Informe de Alta",
            required="informe_alta:generate",
            rows=lambda q: episodios_pendientes_de_informe(),
        ),
        Page(
            slug="modulo-alta",
            title="Módulo de Alta",
            required="modulo_alta:aprobar",
            rows=lambda q: episodios_con_informe(),
        ),
        Page(
            slug="auditoria",
            title="Auditoría",
            required="auditoria:review",
            rows=lambda q: list_audit_entries(),
        ),
        Page(
            slug="usuarios",
            title="Usuarios",
            required="user:view",
            rows=lambda q: list_users(search=q),
            capabilities={
                "create": ("user:create",),
                "update": ("user:update",),
                "delete": ("user:delete", "user:manage"),
            },
        ),
    )
}
