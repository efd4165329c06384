# mat_core/iam/gate.py
"""
Auth gate shared by API routes and dashboard pages.

has_required() is the pure decision; authorize() wraps it with the session cookie,
the user row and the permission resolver, and returns a structured result instead of raising
so callers can shape the denial (JSON error for the API, in-place fragment for pages).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.response import Response

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService
from mat_core.common.api.exceptions import error_response
from mat_core.iam.resolver import resolve_permissions
from mat_core.iam.session import SessionUser, read_session

Required = Union[str, Sequence[str]]

NOT_AUTHENTICATED_MSG = "No autenticado"
USER_NOT_FOUND_MSG = "Usuario no encontrado"
INACTIVE_MSG = "Cuenta desactivada"

ACTION_VERBS = {
    "view": "visualizar",
    "read": "visualizar",
    "create": "crear",
    "update": "editar",
    "delete": "eliminar",
    "alta": "procesar alta de",
    "manage": "gestionar",
    "review": "revisar",
    "generate": "generar",
    "aprobar": "aprobar",
}


def _codes(required: Required) -> list[str]:
    return [required] if isinstance(required, str) else list(required)


def has_required(permissions: Iterable[str], required: Required, require_all: bool | None = None) -> bool:
    """
    A single code must be held. A list is satisfied by any one of its codes
    unless require_all=True. An empty requirement never passes.
    """
    codes = _codes(required)
    if not codes:
        return False

    held = set(permissions or ())
    if isinstance(required, str) or require_all or len(codes) == 1:
        return all(c in held for c in codes)
    return any(c in held for c in codes)


def denial_message(required: Required, entity: str) -> str:
    codes = _codes(required)
    action = codes[0].rsplit(":", 1)[-1] if codes else ""
    action = action.removesuffix("_limited")
    verb = ACTION_VERBS.get(action, action)
    return f"No tiene permisos para {verb} {entity}"


@dataclass
class AuthResult:
    session: SessionUser | None = None
    db_user: object | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)
    error: Response | None = None
    error_status: int | None = None
    actor: Actor | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def user_id(self) -> int | None:
        return self.session.id if self.session else None

    @property
    def roles(self) -> tuple[str, ...]:
        return self.session.roles if self.session else ()

    def has(self, code: str) -> bool:
        return code in self.permissions


def _fail(request, message: str, http_status: int, **kwargs) -> AuthResult:
    return AuthResult(error=error_response(request, message, http_status), error_status=http_status, **kwargs)


def authenticate(request) -> AuthResult:
    """
    session -> user row -> active account -> permissions, with no policy applied.

    Pages use this directly and shape their own denial from error_status.
    """
    session = read_session(request)
    if session is None:
        return _fail(request, NOT_AUTHENTICATED_MSG, status.HTTP_401_UNAUTHORIZED)

    User = get_user_model()
    db_user = User.objects.select_related("profile").filter(pk=session.id).first()
    if db_user is None:
        return _fail(request, USER_NOT_FOUND_MSG, status.HTTP_404_NOT_FOUND, session=session)
    if not db_user.is_active:
        return _fail(request, INACTIVE_MSG, status.HTTP_403_FORBIDDEN, session=session, db_user=db_user)

    return AuthResult(
        session=session,
        db_user=db_user,
        permissions=frozenset(resolve_permissions(session.roles, user_id=db_user.pk)),
        actor=Actor.from_request(request, user_id=db_user.pk, roles=session.roles),
    )


def authorize(
    request,
    required: Required | None,
    entity: str,
    *,
    require_all: bool | None = None,
    skip_permission_check: bool = False,
    audit_denial: bool = False,
    audit_entity: str | None = None,
) -> AuthResult:
    """
    session -> user row -> permissions -> policy.

    401 no/invalid session, 404 user row gone, 403 inactive account or missing permission.
    With audit_denial, a missing permission also writes a best-effort PERMISSION_DENIED row
    against audit_entity (defaults to entity, the label used in the message).
    """
    auth = authenticate(request)
    if auth.error is not None or skip_permission_check:
        return auth

    if required is None or not has_required(auth.permissions, required, require_all):
        if audit_denial:
            AuditService.record_best_effort(
                actor=auth.actor,
                accion=AuditAction.PERMISSION_DENIED,
                entidad=audit_entity or entity,
            )
        return _fail(
            request,
            denial_message(required or "", entity),
            status.HTTP_403_FORBIDDEN,
            session=auth.session,
            db_user=auth.db_user,
            permissions=auth.permissions,
            actor=auth.actor,
        )

    return auth


def authorize_and_audit(request, required: Required, entity: str, **kwargs) -> AuthResult:
    return authorize(request, required, entity, audit_denial=True, **kwargs)
