# mat_core/iam/session.py
"""
The `user` cookie: a signed, expiring token carrying
{id, email, nombre, rut, roles[], permissions[]}.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Iterable

from django.conf import settings
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken


def _jwt_cfg() -> dict:
    return getattr(settings, "SIMPLE_JWT", {}) or {}


def cookie_name() -> str:
    return _jwt_cfg().get("AUTH_COOKIE", "user")


def _seconds(value: Any) -> int:
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


@dataclass(frozen=True)
class SessionUser:
    id: int
    email: str
    nombre: str
    rut: str | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)
    permissions: tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "nombre": self.nombre,
            "rut": self.rut,
            "roles": list(self.roles),
            "permissions": list(self.permissions),
        }


def session_from_token(token) -> SessionUser | None:
    payload = token.payload
    try:
        user_id = int(payload.get("id"))
    except (TypeError, ValueError):
        return None

    roles = payload.get("roles") or []
    permissions = payload.get("permissions") or []
    if not isinstance(roles, list) or not isinstance(permissions, list):
        return None

    return SessionUser(
        id=user_id,
        email=str(payload.get("email") or ""),
        nombre=str(payload.get("nombre") or ""),
        rut=payload.get("rut"),
        roles=tuple(str(r) for r in roles),
        permissions=tuple(str(p) for p in permissions),
    )


def decode_session(raw: str | None) -> SessionUser | None:
    if not raw:
        return None
    try:
        token = AccessToken(raw)
    except TokenError:
        return None
    return session_from_token(token)


def read_session(request) -> SessionUser | None:
    """
    Absent, tampered, expired or malformed cookie -> None.
    """
    return decode_session(request.COOKIES.get(cookie_name()))


def build_session_token(
    user,
    *,
    nombre: str,
    rut: str | None,
    roles: Iterable[str],
    permissions: Iterable[str],
) -> str:
    token = AccessToken.for_user(user)
    token["id"] = user.id
    token["email"] = user.email
    token["nombre"] = nombre
    token["rut"] = rut
    token["roles"] = sorted(roles)
    token["permissions"] = sorted(permissions)
    return str(token)


def set_session_cookie(response, token: str) -> None:
    cfg = _jwt_cfg()
    response.set_cookie(
        cookie_name(),
        token,
        max_age=_seconds(cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(hours=24))),
        httponly=bool(cfg.get("AUTH_COOKIE_HTTP_ONLY", True)),
        secure=bool(cfg.get("AUTH_COOKIE_SECURE", False)),
        samesite=cfg.get("AUTH_COOKIE_SAMESITE", "Lax"),
        path="/",
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(cookie_name(), path="/", samesite=_jwt_cfg().get("AUTH_COOKIE_SAMESITE", "Lax"))
