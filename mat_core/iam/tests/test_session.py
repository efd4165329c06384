# mat_core/iam/tests/test_session.py
from datetime import timedelta

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from mat_core.iam.services import SessionService
from mat_core.iam.session import decode_session

pytestmark = pytest.mark.django_db


def test_token_carries_session_claims(matrona):
    issued = SessionService.issue_for(matrona)

    session = decode_session(issued.token)

    assert session.id == matrona.id
    assert session.nombre == "María González"
    assert session.roles == ("matrona",)
    assert "madre:create" in session.permissions


def test_tampered_token_is_rejected(matrona):
    token = SessionService.issue_for(matrona).token
    head, payload, sig = token.split(".")

    assert decode_session(f"{head}.{payload}.{sig[::-1]}") is None


def test_expired_token_is_rejected(matrona):
    token = AccessToken.for_user(matrona)
    token["id"] = matrona.id
    token.set_exp(lifetime=-timedelta(seconds=1))

    assert decode_session(str(token)) is None


def test_token_without_id_claim_is_rejected(matrona):
    token = AccessToken.for_user(matrona)

    assert decode_session(str(token)) is None


@pytest.mark.parametrize("raw", [None, "", "abc.def"])
def test_garbage_is_none(raw):
    assert decode_session(raw) is None
