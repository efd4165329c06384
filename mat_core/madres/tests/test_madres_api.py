# mat_core/madres/tests/test_madres_api.py
import pytest

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.madres.models import Madre

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    data = {
        "rut": "11111111-1",
        "nombres": "Josefa",
        "apellidos": "Muñoz Vera",
        "edad": 31,
        "fichaClinica": "FC-0001",
    }
    data.update(overrides)
    return data


def test_create_madre_audits_create(matrona_client, matrona):
    res = matrona_client.post("/api/madres/", _payload(), format="json")

    assert res.status_code == 201, res.data
    assert res.data["message"] == "Madre registrada exitosamente"
    body = res.data["data"]
    assert body["rut"] == "11111111-1"
    assert body["fichaClinica"] == "FC-0001"

    row = AuditEntry.objects.get(accion=AuditAction.CREATE, entidad="Madre")
    assert row.entidad_id == body["id"]
    assert row.usuario_id == matrona.id
    assert row.detalle_after["rut"] == "11111111-1"


def test_lowercase_check_digit_is_normalized(matrona_client):
    res = matrona_client.post("/api/madres/", _payload(rut="10000013-k"), format="json")

    assert res.status_code == 201, res.data
    assert res.data["data"]["rut"] == "10000013-K"


@pytest.mark.parametrize("rut", ["12.345.678-5", "12345678-4", "123"])
def test_invalid_rut_is_400(matrona_client, rut):
    res = matrona_client.post("/api/madres/", _payload(rut=rut), format="json")

    assert res.status_code == 400
    assert res.data["error"].startswith("RUT inválido")


def test_required_fields(matrona_client):
    res = matrona_client.post("/api/madres/", {"rut": "11111111-1"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "RUT, nombres y apellidos son requeridos"


def test_duplicate_rut_is_409_and_writes_nothing(matrona_client, madre):
    res = matrona_client.post("/api/madres/", _payload(rut=madre.rut), format="json")

    assert res.status_code == 409
    assert res.data["error"] == "Ya existe una madre registrada con este RUT"
    assert Madre.objects.count() == 1
    assert not AuditEntry.objects.filter(entidad="Madre").exists()


def test_duplicate_ficha_is_409(matrona_client):
    Madre.objects.create(rut="22222222-2", nombres="A", apellidos="B", ficha_clinica="FC-0001")

    res = matrona_client.post("/api/madres/", _payload(), format="json")

    assert res.status_code == 409


def test_update_records_before_and_after(matrona_client, madre):
    res = matrona_client.patch(f"/api/madres/{madre.id}/", {"telefono": "+56911112222"}, format="json")

    assert res.status_code == 200, res.data
    row = AuditEntry.objects.get(accion=AuditAction.UPDATE, entidad="Madre")
    assert row.detalle_before["telefono"] == ""
    assert row.detalle_after["telefono"] == "+56911112222"


def test_retrieve_includes_recent_partos_for_full_access(matrona_client, parto):
    res = matrona_client.get(f"/api/madres/{parto.madre_id}/")

    assert res.status_code == 200
    assert [p["id"] for p in res.data["data"]["partos"]] == [str(parto.id)]


def test_limited_access_sees_basic_data_only(administrativo_client, parto):
    res = administrativo_client.get(f"/api/madres/{parto.madre_id}/")

    assert res.status_code == 200
    assert "partos" not in res.data["data"]


def test_limited_create_rejects_extra_fields(administrativo_client):
    res = administrativo_client.post("/api/madres/", _payload(observaciones="x"), format="json")

    assert res.status_code == 403
    assert "observaciones" in res.data["error"]


def test_limited_create_with_basic_fields(administrativo_client):
    res = administrativo_client.post("/api/madres/", _payload(), format="json")
    assert res.status_code == 201, res.data


def test_delete_with_partos_is_409(matrona_client, parto):
    res = matrona_client.delete(f"/api/madres/{parto.madre_id}/")

    assert res.status_code == 409
    assert res.data["error"] == "No se puede eliminar la madre porque tiene partos registrados"
    assert Madre.objects.filter(pk=parto.madre_id).exists()


def test_delete_audits_before(matrona_client, madre):
    res = matrona_client.delete(f"/api/madres/{madre.id}/")

    assert res.status_code == 200
    row = AuditEntry.objects.get(accion=AuditAction.DELETE, entidad="Madre")
    assert row.detalle_before["rut"] == madre.rut
    assert row.detalle_after is None


def test_enfermera_denied(enfermera_client):
    res = enfermera_client.get("/api/madres/")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para visualizar madres"


def test_anonymous_create_is_401_and_writes_nothing(anon_client):
    res = anon_client.post("/api/madres/", _payload(), format="json")

    assert res.status_code == 401
    assert res.data["error"] == "No autenticado"
    assert not Madre.objects.exists()
    assert not AuditEntry.objects.exists()
