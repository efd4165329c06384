# mat_core/informes/tests/test_informes_api.py
import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.common.models import EpisodeStatus
from mat_core.episodios.models import EpisodioMadre
from mat_core.informes.models import InformeAlta
from mat_core.madres.models import Madre
from mat_core.partos.models import Parto

pytestmark = pytest.mark.django_db


@pytest.fixture
def episodio(madre):
    return EpisodioMadre.objects.create(madre=madre, fecha_ingreso=timezone.now() - timedelta(days=1))


@pytest.fixture
def informe(episodio, parto, recien_nacido, matrona_client):
    res = matrona_client.post(
        "/api/informe-alta/",
        {"episodioId": str(episodio.id), "partoId": str(parto.id), "formato": "pdf"},
        format="json",
    )
    assert res.status_code == 201, res.data
    return InformeAlta.objects.get(episodio=episodio)


def test_generate_freezes_content_and_audits(informe, matrona, recien_nacido):
    assert informe.formato == "PDF"
    assert informe.generado_por_id == matrona.id
    assert informe.contenido["madre"]["rut"] == "12345678-5"
    assert [rn["id"] for rn in informe.contenido["recienNacidos"]] == [str(recien_nacido.id)]

    row = AuditEntry.objects.get(accion=AuditAction.CREATE, entidad="InformeAlta")
    assert row.entidad_id == str(informe.id)


def test_pending_lists_episodes_without_report(matrona_client, episodio, parto):
    res = matrona_client.get("/api/informe-alta/?pendientes=true")

    assert res.status_code == 200, res.data
    assert [e["id"] for e in res.data["data"]] == [str(episodio.id)]
    assert [p["id"] for p in res.data["data"][0]["partos"]] == [str(parto.id)]


def test_pending_excludes_reported_episodes(matrona_client, informe):
    res = matrona_client.get("/api/informe-alta/?pendientes=true")
    assert res.data["data"] == []

    res = matrona_client.get("/api/informe-alta/")
    assert [i["id"] for i in res.data["data"]] == [str(informe.id)]


def test_second_report_for_episode_is_rejected(matrona_client, informe, parto):
    res = matrona_client.post(
        "/api/informe-alta/",
        {"episodioId": str(informe.episodio_id), "partoId": str(parto.id), "formato": "PDF"},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "Este episodio ya tiene un informe de alta generado"


def test_invalid_formato(matrona_client, episodio, parto):
    res = matrona_client.post(
        "/api/informe-alta/",
        {"episodioId": str(episodio.id), "partoId": str(parto.id), "formato": "XLS"},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"].startswith("Formato inválido")


def test_parto_of_another_mother_is_rejected(matrona_client, episodio):
    otra = Madre.objects.create(rut="11111111-1", nombres="Otra", apellidos="Madre")
    ajeno = Parto.objects.create(madre=otra, fecha_hora=timezone.now(), tipo="VAGINAL", lugar="SALA_PARTO")

    res = matrona_client.post(
        "/api/informe-alta/",
        {"episodioId": str(episodio.id), "partoId": str(ajeno.id), "formato": "HTML"},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "El parto no pertenece a la madre del episodio"


def test_unknown_episode_is_404(matrona_client, parto):
    res = matrona_client.post(
        "/api/informe-alta/",
        {"episodioId": str(uuid.uuid4()), "partoId": str(parto.id), "formato": "PDF"},
        format="json",
    )
    assert res.status_code == 404


def test_informe_by_episode(medico_client, informe):
    res = medico_client.get(f"/api/informe-alta/episodio/{informe.episodio_id}/")

    assert res.status_code == 200, res.data
    body = res.data["data"]
    assert body["madre"]["rut"] == "12345678-5"
    assert body["generadoPor"] == "María González"
    assert body["recienNacidos"][0]["pesoNacimientoGramos"] == 3250


@pytest.mark.parametrize("pk", [uuid.uuid4(), "basura"])
def test_informe_by_episode_missing(medico_client, pk):
    res = medico_client.get(f"/api/informe-alta/episodio/{pk}/")

    assert res.status_code == 404
    assert res.data["error"] == "Informe no encontrado para este episodio"


def test_enfermera_cannot_generate(enfermera_client):
    res = enfermera_client.get("/api/informe-alta/")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para generar informes de alta"


def test_modulo_alta_lists_reported_episodes(medico_client, informe):
    res = medico_client.get("/api/modulo-alta/")

    assert res.status_code == 200
    assert res.data["total"] == 1
    assert res.data["data"][0]["informeGenerado"] is True


def test_aprobar_without_report_is_400(medico_client, episodio):
    res = medico_client.post(f"/api/modulo-alta/{episodio.id}/aprobar/", {}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "El episodio no tiene un informe de alta generado"


def test_aprobar_discharges_the_episode(medico_client, medico, informe):
    res = medico_client.post(
        f"/api/modulo-alta/{informe.episodio_id}/aprobar/", {"condicionEgreso": "Buenas condiciones"}, format="json"
    )

    assert res.status_code == 200, res.data
    assert res.data["message"] == "Alta médica aprobada exitosamente"
    assert res.data["data"]["estado"] == "ALTA"
    assert res.data["data"]["aprobadoPor"] == "Dr. Carlos Pérez"

    episodio = EpisodioMadre.objects.get(pk=informe.episodio_id)
    assert episodio.estado == EpisodeStatus.ALTA
    row = AuditEntry.objects.get(accion=AuditAction.UPDATE, entidad="EpisodioMadre")
    assert row.usuario_id == medico.id


def test_aprobar_unknown_episode(medico_client):
    res = medico_client.post(f"/api/modulo-alta/{uuid.uuid4()}/aprobar/", {}, format="json")
    assert res.status_code == 404


def test_aprobar_denied_for_matrona(matrona_client, informe):
    res = matrona_client.post(f"/api/modulo-alta/{informe.episodio_id}/aprobar/", {}, format="json")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para aprobar altas médicas"
