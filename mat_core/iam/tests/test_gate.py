# mat_core/iam/tests/test_gate.py
import pytest
from rest_framework.test import APIClient

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.conftest import client_for
from mat_core.iam.gate import denial_message, has_required
from mat_core.iam.models import RolePermission
from mat_core.iam.session import cookie_name


@pytest.mark.parametrize(
    "held,required,require_all,expected",
    [
        ({"a"}, "a", None, True),
        ({"a"}, "b", None, False),
        ({"a"}, ["a", "b"], None, True),
        ({"a"}, ["a", "b"], True, False),
        ({"a", "b"}, ["a", "b"], True, True),
        ({"a"}, [], None, False),
        (set(), "a", None, False),
    ],
)
def test_has_required(held, required, require_all, expected):
    assert has_required(held, required, require_all) is expected


def test_denial_message_uses_action_verb():
    assert denial_message("madre:view", "madres") == "No tiene permisos para visualizar madres"
    assert denial_message(["madre:create_limited"], "madres") == "No tiene permisos para crear madres"
    assert denial_message("alta:manage", "altas URNI") == "No tiene permisos para gestionar altas URNI"


@pytest.mark.django_db
def test_no_cookie_is_401(anon_client):
    res = anon_client.get("/api/partos/")
    assert res.status_code == 401
    assert res.data["error"] == "No autenticado"


@pytest.mark.django_db
def test_garbage_cookie_is_401():
    c = APIClient()
    c.cookies[cookie_name()] = "not-a-token"
    res = c.get("/api/partos/")
    assert res.status_code == 401


@pytest.mark.django_db
def test_deleted_user_row_is_404(make_user):
    user = make_user("matrona")
    c = client_for(user)
    user.delete()

    res = c.get("/api/partos/")
    assert res.status_code == 404
    assert res.data["error"] == "Usuario no encontrado"


@pytest.mark.django_db
def test_inactive_account_is_403(make_user):
    user = make_user("matrona")
    c = client_for(user)
    user.is_active = False
    user.save()

    res = c.get("/api/partos/")
    assert res.status_code == 403
    assert res.data["error"] == "Cuenta desactivada"


@pytest.mark.django_db
def test_permissions_are_resolved_per_request_not_from_cookie(make_user, roles):
    user = make_user("matrona")
    c = client_for(user)
    assert c.get("/api/partos/").status_code == 200

    # grant withdrawn after the cookie was issued
    RolePermission.objects.filter(role=roles["matrona"], permission__code="parto:view").delete()

    res = c.get("/api/partos/")
    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para visualizar partos"


@pytest.mark.django_db
def test_missing_permission_writes_permission_denied_row(enfermera_client, enfermera):
    res = enfermera_client.get("/api/partos/")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para visualizar partos"

    row = AuditEntry.objects.get(accion=AuditAction.PERMISSION_DENIED)
    assert row.entidad == "Parto"
    assert row.usuario_id == enfermera.id
    assert row.rol == "enfermera"


@pytest.mark.django_db
def test_unaudited_route_leaves_no_row_on_denial(enfermera_client):
    res = enfermera_client.get("/api/modulo-alta/")

    assert res.status_code == 403
    assert not AuditEntry.objects.filter(accion=AuditAction.PERMISSION_DENIED).exists()
