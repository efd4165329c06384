# mat_core/audit/tests/test_audit_log.py
from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from mat_core.audit.models import AuditAction, AuditEntry
from mat_core.audit.services import Actor, AuditService, snapshot

pytestmark = pytest.mark.django_db


def _entry(**kw):
    defaults = {"actor": None, "accion": AuditAction.CREATE, "entidad": "Madre"}
    defaults.update(kw)
    return AuditService.record(**defaults)


def test_entries_are_immutable():
    e = _entry()

    e.entidad = "Otra"
    with pytest.raises(ValidationError):
        e.save()
    with pytest.raises(ValidationError):
        e.delete()
    with pytest.raises(ValidationError):
        AuditEntry.objects.filter(pk=e.pk).update(entidad="Otra")
    with pytest.raises(ValidationError):
        AuditEntry.objects.all().delete()


def test_record_copies_actor_context(matrona):
    actor = Actor(user_id=matrona.id, roles=("matrona", "jefatura"), ip="10.0.0.1", user_agent="pytest")

    e = _entry(actor=actor, entidad_id=42, after={"a": 1})

    assert e.usuario_id == matrona.id
    assert e.rol == "matrona, jefatura"
    assert e.entidad_id == "42"
    assert e.ip == "10.0.0.1"
    assert e.detalle_after == {"a": 1}


def test_best_effort_swallows_failures(monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(AuditService, "record", staticmethod(boom))

    assert AuditService.record_best_effort(actor=None, accion=AuditAction.LOGIN, entidad="User") is None


def test_snapshot_is_json_safe(parto):
    data = snapshot(parto)

    assert data["id"] == str(parto.id)
    assert data["madre_id"] == str(parto.madre_id)
    assert isinstance(data["fecha_hora"], str)
    assert len(data["matronas"]) == 1


def test_review_requires_permission_and_audits_denial(matrona_client, matrona):
    res = matrona_client.get("/api/auditoria/")

    assert res.status_code == 403
    assert res.data["error"] == "No tiene permisos para revisar auditoría"
    row = AuditEntry.objects.get(accion=AuditAction.PERMISSION_DENIED)
    assert row.entidad == "Auditoria"
    assert row.usuario_id == matrona.id


def test_review_lists_with_default_limit(jefatura_client, matrona):
    for i in range(3):
        _entry(actor=Actor(user_id=matrona.id, roles=("matrona",)), entidad_id=i)

    res = jefatura_client.get("/api/auditoria/")

    assert res.status_code == 200, res.data
    assert res.data["limit"] == 50
    assert res.data["total"] == 3
    assert sorted(e["entidadId"] for e in res.data["data"]) == ["0", "1", "2"]
    assert res.data["data"][0]["usuario"]["nombre"] == "María González"


def test_filters(jefatura_client, matrona, medico):
    _entry(actor=Actor(user_id=matrona.id), accion=AuditAction.CREATE, entidad="Madre")
    _entry(actor=Actor(user_id=medico.id), accion=AuditAction.UPDATE, entidad="EpisodioURNI")

    res = jefatura_client.get(f"/api/auditoria/?usuarioId={medico.id}")
    assert [e["entidad"] for e in res.data["data"]] == ["EpisodioURNI"]

    res = jefatura_client.get("/api/auditoria/?accion=CREATE&entidad=Madre")
    assert res.data["total"] == 1


def test_fecha_fin_is_inclusive_through_end_of_day(jefatura_client):
    _entry()
    today = timezone.localdate()
    yesterday = today - timedelta(days=1)

    res = jefatura_client.get(f"/api/auditoria/?fechaInicio={today}&fechaFin={today}")
    assert res.data["total"] == 1

    res = jefatura_client.get(f"/api/auditoria/?fechaFin={yesterday}")
    assert res.data["total"] == 0


def test_invalid_filter_is_400(jefatura_client):
    res = jefatura_client.get("/api/auditoria/?fechaInicio=ayer")

    assert res.status_code == 400
    assert res.data["error"] == "Parámetros de filtro inválidos"
    assert "fechaInicio" in res.data["details"]
