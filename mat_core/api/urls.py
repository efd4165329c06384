# mat_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from mat_core.audit.api.views import AuditEntryViewSet
from mat_core.episodios.api.views import AltaEpisodioView, EpisodioMadreViewSet
from mat_core.iam.api.auth import DevLoginView, DevUsersView, LoginView, LogoutView
from mat_core.iam.api.me import MeView
from mat_core.iam.api.roles import RoleListView
from mat_core.iam.api.users import UserViewSet
from mat_core.informes.api.views import (
    InformeAltaView,
    InformeEpisodioView,
    ModuloAltaAprobarView,
    ModuloAltaListView,
)
from mat_core.madres.api.views import MadreViewSet
from mat_core.partos.api.views import PartoViewSet, ProfesionalesView
from mat_core.recien_nacidos.api.views import RecienNacidoViewSet
from mat_core.urni.api.views import AltaURNIView, EpisodioURNIViewSet

router = DefaultRouter()

router.register(r"users", UserViewSet, basename="users")
router.register(r"madres", MadreViewSet, basename="madres")
router.register(r"partos", PartoViewSet, basename="partos")
router.register(r"recien-nacidos", RecienNacidoViewSet, basename="recien-nacidos")
router.register(r"urni/episodio", EpisodioURNIViewSet, basename="urni-episodio")
router.register(r"ingreso-alta", EpisodioMadreViewSet, basename="ingreso-alta")
router.register(r"auditoria", AuditEntryViewSet, basename="auditoria")

urlpatterns = [
    # Auth + session
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/dev-login/", DevLoginView.as_view(), name="dev-login"),
    path("auth/dev-users/", DevUsersView.as_view(), name="dev-users"),
    path("me/", MeView.as_view(), name="me"),
    path("roles/", RoleListView.as_view(), name="roles"),

    # before the router so "profesionales" is not taken for a parto id
    path("partos/profesionales/", ProfesionalesView.as_view(), name="partos-profesionales"),

    # Discharges
    path("urni/episodio/<str:pk>/alta/", AltaURNIView.as_view(), name="urni-episodio-alta"),
    path("ingreso-alta/<str:pk>/alta/", AltaEpisodioView.as_view(), name="ingreso-alta-alta"),

    # Discharge reports + approval
    path("informe-alta/", InformeAltaView.as_view(), name="informe-alta"),
    path("informe-alta/episodio/<str:pk>/", InformeEpisodioView.as_view(), name="informe-alta-episodio"),
    path("modulo-alta/", ModuloAltaListView.as_view(), name="modulo-alta"),
    path("modulo-alta/<str:pk>/aprobar/", ModuloAltaAprobarView.as_view(), name="modulo-alta-aprobar"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
