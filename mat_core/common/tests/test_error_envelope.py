# mat_core/common/tests/test_error_envelope.py
import uuid

import pytest

pytestmark = pytest.mark.django_db


def test_unauthenticated_is_401_envelope_with_request_id(anon_client):
    res = anon_client.get("/api/madres/")

    assert res.status_code == 401
    assert res.data == {"error": "No autenticado"}
    assert res["X-Request-Id"]


def test_incoming_request_id_is_echoed(anon_client):
    res = anon_client.get("/api/madres/", HTTP_X_REQUEST_ID="abc-123")
    assert res["X-Request-Id"] == "abc-123"


def test_not_found_uses_envelope(matrona_client):
    res = matrona_client.get(f"/api/madres/{uuid.uuid4()}/")

    assert res.status_code == 404
    assert res.data["error"] == "Madre no encontrada"


def test_serializer_errors_become_400_envelope_with_details(matrona_client):
    res = matrona_client.post("/api/madres/", {"edad": "not-a-number"}, format="json")

    assert res.status_code == 400
    assert isinstance(res.data["error"], str)
    assert "edad" in res.data["details"]
