# mat_core/conftest.py
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.utils import timezone
from rest_framework.test import APIClient

from mat_core.iam.catalog import DEV_PASSWORD
from mat_core.iam.models import Role, UserProfile, UserRole
from mat_core.iam.services import SessionService
from mat_core.iam.session import cookie_name
from mat_core.madres.models import Madre
from mat_core.partos.models import LugarParto, Parto, TipoParto
from mat_core.recien_nacidos.models import RecienNacido


@pytest.fixture
def roles(db):
    """
    Fixed permission catalogue + the six system roles.
    """
    call_command("ensure_roles", verbosity=0)
    return {r.name: r for r in Role.objects.all()}


@pytest.fixture
def make_user(roles):
    counter = {"n": 0}

    def _make(*role_names, email=None, nombre=None, rut=None, is_active=True):
        counter["n"] += 1
        n = counter["n"]
        email = (email or f"user{n}@srorn.cl").lower()

        User = get_user_model()
        user = User.objects.create_user(username=email, email=email, password=DEV_PASSWORD, is_active=is_active)
        UserProfile.objects.create(user=user, nombre=nombre or f"Usuario {n}", rut=rut)
        for name in role_names:
            UserRole.objects.create(user=user, role=roles[name])
        return user

    return _make


def client_for(user) -> APIClient:
    """
    APIClient carrying a freshly issued session cookie for `user`.
    """
    c = APIClient()
    c.cookies[cookie_name()] = SessionService.issue_for(user).token
    return c


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def matrona(make_user):
    return make_user("matrona", nombre="María González")


@pytest.fixture
def enfermera(make_user):
    return make_user("enfermera", nombre="Ana Martínez")


@pytest.fixture
def medico(make_user):
    return make_user("medico", nombre="Dr. Carlos Pérez")


@pytest.fixture
def administrativo(make_user):
    return make_user("administrativo", nombre="Roberto Silva")


@pytest.fixture
def jefatura(make_user):
    return make_user("jefatura", nombre="Dra. Patricia López")


@pytest.fixture
def admin_ti(make_user):
    return make_user("administrador_ti", nombre="Departamento TI")


@pytest.fixture
def matrona_client(matrona):
    return client_for(matrona)


@pytest.fixture
def medico_client(medico):
    return client_for(medico)


@pytest.fixture
def enfermera_client(enfermera):
    return client_for(enfermera)


@pytest.fixture
def administrativo_client(administrativo):
    return client_for(administrativo)


@pytest.fixture
def jefatura_client(jefatura):
    return client_for(jefatura)


@pytest.fixture
def admin_ti_client(admin_ti):
    return client_for(admin_ti)


@pytest.fixture
def madre(db):
    return Madre.objects.create(rut="12345678-5", nombres="Camila", apellidos="Rojas Soto", edad=29)


@pytest.fixture
def parto(madre, matrona, enfermera):
    p = Parto.objects.create(
        madre=madre,
        fecha_hora=timezone.now() - timedelta(hours=6),
        tipo=TipoParto.VAGINAL,
        lugar=LugarParto.SALA_PARTO,
    )
    p.matronas.set([matrona])
    p.enfermeras.set([enfermera])
    return p


@pytest.fixture
def recien_nacido(parto):
    return RecienNacido.objects.create(parto=parto, sexo="F", peso_nacimiento_gramos=3250, apgar_1_min=8, apgar_5_min=9)
