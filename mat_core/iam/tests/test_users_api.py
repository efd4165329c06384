# mat_core/iam/tests/test_users_api.py
import pytest
from django.contrib.auth import get_user_model

from mat_core.audit.models import AuditAction, AuditEntry

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    data = {
        "email": "Nueva.Matrona@srorn.cl",
        "password": "Clave-Segura-2024",
        "nombre": "Nueva Matrona",
        "rut": "11111111-1",
        "roles": ["matrona"],
    }
    data.update(overrides)
    return data


def test_admin_creates_user_without_leaking_password(admin_ti_client):
    res = admin_ti_client.post("/api/users/", _payload(), format="json")

    assert res.status_code == 201, res.data
    body = res.data["data"]
    assert body["email"] == "nueva.matrona@srorn.cl"
    assert body["roles"] == ["matrona"]
    assert body["activo"] is True
    assert "password" not in body

    row = AuditEntry.objects.get(accion=AuditAction.CREATE, entidad="User")
    assert "password" not in row.detalle_after


def test_duplicate_email_is_409(admin_ti_client, make_user):
    make_user("matrona", email="nueva.matrona@srorn.cl")

    res = admin_ti_client.post("/api/users/", _payload(), format="json")

    assert res.status_code == 409
    assert res.data["error"] == "El email ya está en uso"


def test_unknown_role_is_400(admin_ti_client):
    res = admin_ti_client.post("/api/users/", _payload(roles=["astronauta"]), format="json")

    assert res.status_code == 400
    assert "astronauta" in res.data["error"]


def test_matrona_cannot_create_users(matrona_client):
    res = matrona_client.post("/api/users/", _payload(), format="json")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para crear usuarios"


def test_list_filters_by_role_and_search(admin_ti_client, make_user):
    make_user("medico", nombre="Dr. House")
    make_user("matrona", nombre="Matrona Uno")

    res = admin_ti_client.get("/api/users/?role=medico")
    assert res.status_code == 200
    assert [u["nombre"] for u in res.data["data"]] == ["Dr. House"]

    res = admin_ti_client.get("/api/users/?search=uno")
    assert [u["nombre"] for u in res.data["data"]] == ["Matrona Uno"]


def test_urni_lookup_of_physicians_without_user_view(matrona_client, make_user):
    make_user("medico", nombre="Dr. Activo")
    make_user("medico", nombre="Dr. Inactivo", is_active=False)

    res = matrona_client.get("/api/users/?role=medico")
    assert res.status_code == 200, res.data
    assert [u["nombre"] for u in res.data["data"]] == ["Dr. Activo"]

    res = matrona_client.get("/api/users/")
    assert res.status_code == 403


def test_update_changes_roles(admin_ti_client, make_user):
    user = make_user("enfermera")

    res = admin_ti_client.patch(f"/api/users/{user.id}/", {"roles": ["enfermera", "matrona"]}, format="json")

    assert res.status_code == 200, res.data
    assert res.data["data"]["roles"] == ["enfermera", "matrona"]
    row = AuditEntry.objects.get(accion=AuditAction.UPDATE, entidad="User")
    assert row.detalle_before["roles"] == ["enfermera"]


def test_admin_cannot_deactivate_self(admin_ti_client, admin_ti):
    res = admin_ti_client.delete(f"/api/users/{admin_ti.id}/")

    assert res.status_code == 400
    assert res.data["error"] == "No puede desactivar su propia cuenta"


def test_delete_soft_deactivates(admin_ti_client, make_user):
    user = make_user("medico")

    res = admin_ti_client.delete(f"/api/users/{user.id}/")

    assert res.status_code == 200
    assert res.data["data"]["activo"] is False
    assert get_user_model().objects.filter(pk=user.id, is_active=False).exists()


def test_unknown_user_is_404(admin_ti_client):
    res = admin_ti_client.get("/api/users/999999/")
    assert res.status_code == 404
