# mat_core/urni/tests/test_urni_api.py
import uuid
from datetime import timedelta

import pytest
from django.db import DatabaseError
from django.utils import timezone

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.audit.services import AuditService
from mat_core.common.models import EpisodeStatus
from mat_core.urni.models import EpisodioURNI

pytestmark = pytest.mark.django_db


@pytest.fixture
def episodio(recien_nacido, medico):
    return EpisodioURNI.objects.create(
        recien_nacido=recien_nacido,
        fecha_hora_ingreso=timezone.now() - timedelta(hours=3),
        motivo_ingreso="Dificultad respiratoria",
        servicio_unidad="URNI",
        responsable_clinico=medico,
    )


def _alta_url(episodio_id):
    return f"/api/urni/episodio/{episodio_id}/alta/"


def test_create_episode(matrona_client, recien_nacido, medico):
    res = matrona_client.post(
        "/api/urni/episodio/",
        {
            "rnId": str(recien_nacido.id),
            "fechaHoraIngreso": timezone.now().isoformat(),
            "motivoIngreso": "Prematurez",
            "servicioUnidad": "UCIN",
            "responsableClinicoId": medico.id,
        },
        format="json",
    )

    assert res.status_code == 201, res.data
    assert res.data["data"]["estado"] == "INGRESADO"
    assert res.data["data"]["recienNacido"]["madre"]["rut"] == "12345678-5"
    assert AuditEntry.objects.filter(accion=AuditAction.CREATE, entidad="EpisodioURNI").count() == 1


def test_one_active_episode_per_newborn(matrona_client, episodio):
    res = matrona_client.post(
        "/api/urni/episodio/",
        {"rnId": str(episodio.recien_nacido_id), "fechaHoraIngreso": timezone.now().isoformat()},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "El recién nacido ya tiene un episodio URNI activo"


def test_create_requires_rn_and_fecha(matrona_client):
    res = matrona_client.post("/api/urni/episodio/", {"motivoIngreso": "x"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Recién nacido y fecha/hora de ingreso son requeridos"


def test_invalid_servicio(matrona_client, recien_nacido):
    res = matrona_client.post(
        "/api/urni/episodio/",
        {"rnId": str(recien_nacido.id), "fechaHoraIngreso": timezone.now().isoformat(), "servicioUnidad": "UTI"},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "Servicio/unidad inválido"


def test_list_by_estado(enfermera_client, episodio):
    res = enfermera_client.get("/api/urni/episodio/?estado=ingresado")
    assert res.status_code == 200
    assert [e["id"] for e in res.data["data"]] == [str(episodio.id)]

    res = enfermera_client.get("/api/urni/episodio/?estado=ALTA")
    assert res.data["data"] == []

    res = enfermera_client.get("/api/urni/episodio/?estado=OTRO")
    assert res.status_code == 400


def test_alta_happy_path_audits_before_after(medico_client, medico, episodio):
    res = medico_client.post(_alta_url(episodio.id), {"condicionEgreso": "Estable"}, format="json")

    assert res.status_code == 200, res.data
    assert res.data["message"] == "Alta URNI procesada exitosamente"
    assert res.data["data"]["estado"] == "ALTA"
    assert res.data["data"]["fechaHoraAlta"] is not None

    episodio.refresh_from_db()
    assert episodio.estado == EpisodeStatus.ALTA
    assert episodio.condicion_egreso == "Estable"

    row = AuditEntry.objects.get(accion=AuditAction.UPDATE, entidad="EpisodioURNI")
    assert row.entidad_id == str(episodio.id)
    assert row.usuario_id == medico.id
    assert row.detalle_before["estado"] == "INGRESADO"
    assert row.detalle_after["estado"] == "ALTA"


def test_second_alta_is_rejected(medico_client, episodio):
    assert medico_client.post(_alta_url(episodio.id), {}, format="json").status_code == 200

    res = medico_client.post(_alta_url(episodio.id), {}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "El episodio URNI ya fue dado de alta"
    assert AuditEntry.objects.filter(accion=AuditAction.UPDATE, entidad="EpisodioURNI").count() == 1


def test_alta_before_ingreso_is_rejected(medico_client, episodio):
    before = (episodio.fecha_hora_ingreso - timedelta(minutes=5)).isoformat()

    res = medico_client.post(_alta_url(episodio.id), {"fechaHoraAlta": before}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "La fecha/hora de alta no puede ser anterior a la fecha/hora de ingreso"
    episodio.refresh_from_db()
    assert episodio.estado == EpisodeStatus.INGRESADO


def test_alta_with_malformed_date(medico_client, episodio):
    res = medico_client.post(_alta_url(episodio.id), {"fechaHoraAlta": "mañana"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "Fecha/hora de alta inválida"


@pytest.mark.parametrize("episodio_id", [uuid.uuid4(), "no-es-uuid"])
def test_alta_unknown_episode_is_404(medico_client, episodio_id):
    res = medico_client.post(_alta_url(episodio_id), {}, format="json")

    assert res.status_code == 404
    assert res.data["error"] == "Episodio URNI no encontrado"


def test_alta_without_permission_is_403_and_audited(matrona_client, matrona, episodio):
    res = matrona_client.post(_alta_url(episodio.id), {}, format="json")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para gestionar altas URNI"

    row = AuditEntry.objects.get(accion=AuditAction.PERMISSION_DENIED)
    assert row.entidad == "EpisodioURNI"
    assert row.usuario_id == matrona.id
    episodio.refresh_from_db()
    assert episodio.estado == EpisodeStatus.INGRESADO


def test_update_after_alta_is_rejected(medico_client, episodio):
    medico_client.post(_alta_url(episodio.id), {}, format="json")

    res = medico_client.patch(f"/api/urni/episodio/{episodio.id}/", {"motivoIngreso": "otro"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "No se puede actualizar un episodio que ya fue dado de alta"


def test_anonymous_alta_is_401_and_changes_nothing(anon_client, episodio):
    res = anon_client.post(_alta_url(episodio.id), {"condicionEgreso": "Estable"}, format="json")

    assert res.status_code == 401
    assert res.data["error"] == "No autenticado"
    episodio.refresh_from_db()
    assert episodio.estado == EpisodeStatus.INGRESADO
    assert episodio.fecha_hora_alta is None
    assert not AuditEntry.objects.exists()


def test_failed_audit_write_rolls_back_alta(medico_client, episodio, monkeypatch):
    def _boom(**kwargs):
        raise DatabaseError("audit table unavailable")

    monkeypatch.setattr(AuditService, "record", staticmethod(_boom))

    res = medico_client.post(_alta_url(episodio.id), {"condicionEgreso": "Estable"}, format="json")

    assert res.status_code == 500
    episodio.refresh_from_db()
    assert episodio.estado == EpisodeStatus.INGRESADO
    assert episodio.fecha_hora_alta is None
    assert episodio.condicion_egreso == ""
