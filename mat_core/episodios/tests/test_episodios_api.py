# mat_core/episodios/tests/test_episodios_api.py
import uuid

import pytest
from django.utils import timezone

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.common.models import EpisodeStatus
from mat_core.episodios.models import EpisodioMadre
from mat_core.episodios.services import alta_completeness_errors
from mat_core.madres.models import Madre

pytestmark = pytest.mark.django_db


@pytest.fixture
def episodio(madre):
    return EpisodioMadre.objects.create(madre=madre, fecha_ingreso=timezone.now(), motivo_ingreso="Trabajo de parto")


def _alta_url(episodio_id):
    return f"/api/ingreso-alta/{episodio_id}/alta/"


def test_create_admission(matrona_client, madre):
    res = matrona_client.post(
        "/api/ingreso-alta/",
        {"madreId": str(madre.id), "fechaIngreso": timezone.now().isoformat(), "motivoIngreso": "Control"},
        format="json",
    )

    assert res.status_code == 201, res.data
    assert res.data["data"]["estado"] == "INGRESADO"
    assert AuditEntry.objects.filter(accion=AuditAction.CREATE, entidad="EpisodioMadre").count() == 1


def test_one_open_admission_per_mother(matrona_client, episodio):
    res = matrona_client.post(
        "/api/ingreso-alta/",
        {"madreId": str(episodio.madre_id), "fechaIngreso": timezone.now().isoformat()},
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"] == "La madre ya tiene un episodio de ingreso activo"


def test_unknown_mother_is_404(matrona_client):
    res = matrona_client.post(
        "/api/ingreso-alta/",
        {"madreId": str(uuid.uuid4()), "fechaIngreso": timezone.now().isoformat()},
        format="json",
    )

    assert res.status_code == 404


def test_completeness_lists_every_gap(madre, parto):
    errors = alta_completeness_errors(madre)

    fecha = timezone.localtime(parto.fecha_hora).strftime("%d-%m-%Y")
    assert errors == [f"El parto del {fecha} debe tener al menos un recién nacido registrado"]


def test_completeness_without_partos():
    madre = Madre.objects.create(rut="11111111-1", nombres="Sin", apellidos="Partos")

    assert alta_completeness_errors(madre) == ["Debe existir al menos un parto registrado"]


def test_retrieve_includes_partos_and_validation(matrona_client, episodio, recien_nacido):
    res = matrona_client.get(f"/api/ingreso-alta/{episodio.id}/")

    assert res.status_code == 200, res.data
    body = res.data["data"]
    assert body["partos"][0]["recienNacidos"][0]["id"] == str(recien_nacido.id)
    assert body["validation"] == {"isValid": True, "errors": []}


def test_incomplete_alta_is_400_with_errors(administrativo_client, episodio, parto):
    res = administrativo_client.post(_alta_url(episodio.id), {}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "No se puede procesar el alta. Faltan datos requeridos."
    assert len(res.data["details"]["errors"]) == 1
    episodio.refresh_from_db()
    assert episodio.estado == EpisodeStatus.INGRESADO
    assert not AuditEntry.objects.filter(entidad="EpisodioMadre").exists()


def test_alta_happy_path(administrativo_client, administrativo, episodio, recien_nacido):
    res = administrativo_client.post(_alta_url(episodio.id), {"condicionEgreso": "Alta a domicilio"}, format="json")

    assert res.status_code == 200, res.data
    assert res.data["message"] == "Alta procesada exitosamente"
    assert res.data["data"]["estado"] == "ALTA"

    row = AuditEntry.objects.get(accion=AuditAction.UPDATE, entidad="EpisodioMadre")
    assert row.usuario_id == administrativo.id
    assert row.detalle_before["estado"] == "INGRESADO"
    assert row.detalle_after["condicion_egreso"] == "Alta a domicilio"


def test_alta_twice(administrativo_client, episodio, recien_nacido):
    administrativo_client.post(_alta_url(episodio.id), {}, format="json")

    res = administrativo_client.post(_alta_url(episodio.id), {}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "El episodio ya fue dado de alta"


def test_alta_unknown_episode(administrativo_client):
    res = administrativo_client.post(_alta_url(uuid.uuid4()), {}, format="json")
    assert res.status_code == 404


def test_alta_denied_for_matrona(matrona_client, episodio):
    res = matrona_client.post(_alta_url(episodio.id), {}, format="json")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para procesar alta de episodios"
    assert AuditEntry.objects.get(accion=AuditAction.PERMISSION_DENIED).entidad == "EpisodioMadre"


def test_edit_after_alta_is_rejected(matrona_client, episodio):
    EpisodioMadre.objects.filter(pk=episodio.pk).update(estado=EpisodeStatus.ALTA)

    res = matrona_client.patch(f"/api/ingreso-alta/{episodio.id}/", {"motivoIngreso": "x"}, format="json")

    assert res.status_code == 400
    assert res.data["error"] == "No se puede editar un episodio que ya fue dado de alta"
