# mat_core/partos/tests/test_partos_api.py
from datetime import timedelta

import pytest
from django.utils import timezone

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.madres.models import Madre
from mat_core.partos.models import Parto

pytestmark = pytest.mark.django_db


@pytest.fixture
def payload(madre, matrona, enfermera):
    def _payload(**overrides):
        data = {
            "madreId": str(madre.id),
            "fechaHora": (timezone.now() - timedelta(hours=2)).isoformat(),
            "tipo": "VAGINAL",
            "lugar": "SALA_PARTO",
            "matronasIds": [matrona.id],
            "enfermerasIds": [enfermera.id],
        }
        data.update(overrides)
        return data

    return _payload


def test_create_parto_with_staff(matrona_client, payload, matrona, enfermera):
    res = matrona_client.post("/api/partos/", payload(), format="json")

    assert res.status_code == 201, res.data
    body = res.data["data"]
    assert [m["id"] for m in body["matronas"]] == [matrona.id]
    assert [e["id"] for e in body["enfermeras"]] == [enfermera.id]
    assert body["madre"]["rut"] == "12345678-5"

    row = AuditEntry.objects.get(accion=AuditAction.CREATE, entidad="Parto")
    assert row.detalle_after["matronas"] == [str(matrona.id)]


def test_future_date_is_rejected(matrona_client, payload):
    future = (timezone.now() + timedelta(hours=1)).isoformat()

    res = matrona_client.post("/api/partos/", payload(fechaHora=future), format="json")

    assert res.status_code == 400
    assert res.data["error"] == "La fecha y hora del parto no puede ser mayor que la fecha y hora actual"


def test_requires_one_matrona(matrona_client, payload):
    res = matrona_client.post("/api/partos/", payload(matronasIds=[]), format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Debe seleccionar al menos una matrona"


def test_requires_one_enfermera(matrona_client, payload):
    res = matrona_client.post("/api/partos/", payload(enfermerasIds=[]), format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Debe seleccionar al menos una enfermera"


def test_cesarean_requires_medico(matrona_client, payload, medico):
    res = matrona_client.post("/api/partos/", payload(tipo="CESAREA_URGENCIA", lugar="PABELLON"), format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Debe seleccionar al menos un médico cuando el tipo de parto es cesárea"

    res = matrona_client.post(
        "/api/partos/",
        payload(tipo="CESAREA_URGENCIA", lugar="PABELLON", medicosIds=[medico.id]),
        format="json",
    )
    assert res.status_code == 201, res.data


def test_staff_must_hold_the_role(matrona_client, payload, enfermera):
    res = matrona_client.post("/api/partos/", payload(matronasIds=[enfermera.id]), format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Una o más matronas especificadas no existen o no tienen el rol correcto"


def test_invalid_tipo(matrona_client, payload):
    res = matrona_client.post("/api/partos/", payload(tipo="AGUA"), format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Tipo de parto inválido"


def test_lugar_detalle_cleared_unless_otro(matrona_client, payload):
    res = matrona_client.post("/api/partos/", payload(lugarDetalle="Ambulancia"), format="json")

    assert res.status_code == 201, res.data
    assert res.data["data"]["lugarDetalle"] == ""


def test_list_filters_by_madre(matrona_client, parto):
    other = Parto.objects.create(
        madre=Madre.objects.create(rut="11111111-1", nombres="Otra", apellidos="Madre"),
        fecha_hora=timezone.now() - timedelta(days=1),
        tipo="VAGINAL",
        lugar="SALA_PARTO",
    )

    res = matrona_client.get(f"/api/partos/?madreId={parto.madre_id}")
    assert res.status_code == 200
    assert [p["id"] for p in res.data["data"]] == [str(parto.id)]

    res = matrona_client.get("/api/partos/")
    assert {p["id"] for p in res.data["data"]} == {str(parto.id), str(other.id)}


def test_invalid_madre_filter_is_400(matrona_client):
    res = matrona_client.get("/api/partos/?madreId=nope")

    assert res.status_code == 400
    assert res.data["error"] == "madreId inválido"


def test_update_keeps_staff_when_not_sent(matrona_client, parto, matrona):
    res = matrona_client.patch(f"/api/partos/{parto.id}/", {"observaciones": "Sin incidentes"}, format="json")

    assert res.status_code == 200, res.data
    assert res.data["data"]["observaciones"] == "Sin incidentes"
    assert [m["id"] for m in res.data["data"]["matronas"]] == [matrona.id]


def test_delete_with_newborns_is_409(matrona_client, recien_nacido):
    res = matrona_client.delete(f"/api/partos/{recien_nacido.parto_id}/")

    assert res.status_code == 409
    assert res.data["error"] == "No se puede eliminar el parto porque tiene recién nacidos registrados"


def test_retrieve_lists_newborns(matrona_client, recien_nacido):
    res = matrona_client.get(f"/api/partos/{recien_nacido.parto_id}/")

    assert res.status_code == 200
    assert res.data["data"]["recienNacidos"][0]["id"] == str(recien_nacido.id)


def test_profesionales_by_role(matrona_client, matrona, medico):
    res = matrona_client.get("/api/partos/profesionales/?role=medico")

    assert res.status_code == 200
    assert [u["id"] for u in res.data["data"]] == [medico.id]


def test_profesionales_rejects_unknown_role(matrona_client):
    res = matrona_client.get("/api/partos/profesionales/?role=jefatura")

    assert res.status_code == 400
    assert res.data["error"].startswith("Rol inválido")
