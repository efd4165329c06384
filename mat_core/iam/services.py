# mat_core/iam/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService
from mat_core.common.api.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from mat_core.iam.models import Role, UserProfile, UserRole
from mat_core.iam.resolver import resolve_permissions, user_role_names
from mat_core.iam.session import SessionUser, build_session_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MSG = "Credenciales inválidas"
INACTIVE_MSG = "Cuenta desactivada"


@dataclass(frozen=True)
class IssuedSession:
    token: str
    session: SessionUser


def _profile_of(user) -> UserProfile | None:
    try:
        return user.profile
    except UserProfile.DoesNotExist:
        return None


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def user_snapshot(user) -> dict:
    """
    Audit payload for users; never carries the password hash.
    """
    profile = _profile_of(user)
    return {
        "id": user.id,
        "email": user.email,
        "nombre": profile.nombre if profile else "",
        "rut": profile.rut if profile else None,
        "activo": user.is_active,
        "roles": user_role_names(user),
    }


class SessionService:
    @staticmethod
    def issue_for(user) -> IssuedSession:
        profile = _profile_of(user)
        roles = user_role_names(user)
        # Login path flattens role grants plus direct grants into the cookie.
        permissions = resolve_permissions(roles, user_id=user.id)
        nombre = profile.nombre if profile else user.get_username()
        rut = profile.rut if profile else None

        token = build_session_token(user, nombre=nombre, rut=rut, roles=roles, permissions=permissions)
        session = SessionUser(
            id=user.id,
            email=user.email,
            nombre=nombre,
            rut=rut,
            roles=tuple(sorted(roles)),
            permissions=tuple(sorted(permissions)),
        )
        return IssuedSession(token=token, session=session)

    @staticmethod
    def login(*, email: str, password: str, request=None) -> IssuedSession:
        User = get_user_model()
        user = User.objects.select_related("profile").filter(username=_normalize_email(email)).first()

        if user is None or not user.check_password(password or ""):
            logger.info("Failed login for %s", _normalize_email(email))
            raise AuthenticationError(INVALID_CREDENTIALS_MSG)
        if not user.is_active:
            raise AuthorizationError(INACTIVE_MSG)

        issued = SessionService.issue_for(user)
        AuditService.record_best_effort(
            actor=Actor.from_request(request, user_id=user.id, roles=issued.session.roles),
            accion=AuditAction.LOGIN,
            entidad="User",
            entidad_id=user.id,
        )
        return issued

    @staticmethod
    def dev_login(*, user_id: int | None = None, email: str | None = None, request=None) -> IssuedSession:
        User = get_user_model()
        qs = User.objects.select_related("profile").filter(is_active=True)
        user = qs.filter(pk=user_id).first() if user_id else qs.filter(username=_normalize_email(email)).first()
        if user is None:
            raise NotFoundError("Usuario no encontrado o inactivo")

        issued = SessionService.issue_for(user)
        AuditService.record_best_effort(
            actor=Actor.from_request(request, user_id=user.id, roles=issued.session.roles),
            accion=AuditAction.LOGIN,
            entidad="User",
            entidad_id=user.id,
            after={"modo": "dev-login"},
        )
        return issued

    @staticmethod
    def logout(*, session: SessionUser | None, request=None) -> None:
        if session is None:
            return
        AuditService.record_best_effort(
            actor=Actor.from_request(request, user_id=session.id, roles=session.roles),
            accion=AuditAction.LOGOUT,
            entidad="User",
            entidad_id=session.id,
        )


class UserService:
    @staticmethod
    def _roles_by_name(names: Iterable[str]) -> list[Role]:
        wanted = sorted({n for n in (names or []) if n})
        roles = list(Role.objects.filter(name__in=wanted))
        missing = set(wanted) - {r.name for r in roles}
        if missing:
            raise ValidationError(f"Roles inexistentes: {', '.join(sorted(missing))}")
        return roles

    @staticmethod
    def _set_roles(user, names: Iterable[str]) -> None:
        roles = UserService._roles_by_name(names)
        UserRole.objects.filter(user=user).delete()
        UserRole.objects.bulk_create([UserRole(user=user, role=r) for r in roles])

    @staticmethod
    def _check_unique(*, email: str | None, rut: str | None, exclude_user_id: int | None = None) -> None:
        User = get_user_model()
        if email:
            qs = User.objects.filter(username=email)
            if exclude_user_id:
                qs = qs.exclude(pk=exclude_user_id)
            if qs.exists():
                raise ConflictError("El email ya está en uso")
        if rut:
            qs = UserProfile.objects.filter(rut=rut)
            if exclude_user_id:
                qs = qs.exclude(user_id=exclude_user_id)
            if qs.exists():
                raise ConflictError("El RUT ya está en uso")

    @staticmethod
    @transaction.atomic
    def create_user(
        *,
        actor: Actor | None,
        email: str,
        password: str,
        nombre: str,
        rut: str | None = None,
        roles: Iterable[str] = (),
        activo: bool = True,
    ):
        User = get_user_model()
        email = _normalize_email(email)
        rut = (rut or "").strip() or None

        UserService._check_unique(email=email, rut=rut)
        validate_password(password)

        user = User(username=email, email=email, is_active=activo)
        user.set_password(password)
        user.save()
        UserProfile.objects.create(user=user, nombre=nombre.strip(), rut=rut)
        UserService._set_roles(user, roles)

        AuditService.record_best_effort(
            actor=actor,
            accion=AuditAction.CREATE,
            entidad="User",
            entidad_id=user.id,
            after=user_snapshot(user),
        )
        return user

    @staticmethod
    @transaction.atomic
    def update_user(*, actor: Actor | None, user_id: int, data: dict):
        User = get_user_model()
        try:
            user = User.objects.select_for_update().get(pk=user_id)
        except User.DoesNotExist:
            raise NotFoundError("Usuario no encontrado")

        profile, _ = UserProfile.objects.get_or_create(user=user, defaults={"nombre": user.get_username()})
        before = user_snapshot(user)

        email = _normalize_email(data["email"]) if data.get("email") else None
        rut = None
        if "rut" in data:
            rut = (data.get("rut") or "").strip() or None
        UserService._check_unique(email=email, rut=rut, exclude_user_id=user.id)

        if email:
            user.username = email
            user.email = email
        if data.get("password"):
            validate_password(data["password"], user=user)
            user.set_password(data["password"])
        if "activo" in data:
            if not data["activo"] and actor and actor.user_id == user.id:
                raise ValidationError("No puede desactivar su propia cuenta")
            user.is_active = bool(data["activo"])
        user.save()

        if data.get("nombre"):
            profile.nombre = data["nombre"].strip()
        if "rut" in data:
            profile.rut = rut
        profile.save()

        if "roles" in data:
            UserService._set_roles(user, data["roles"])

        AuditService.record_best_effort(
            actor=actor,
            accion=AuditAction.UPDATE,
            entidad="User",
            entidad_id=user.id,
            before=before,
            after=user_snapshot(user),
        )
        return user

    @staticmethod
    @transaction.atomic
    def deactivate_user(*, actor: Actor | None, user_id: int):
        """
        Users are never hard-deleted.
        """
        if actor and actor.user_id == user_id:
            raise ValidationError("No puede desactivar su propia cuenta")
        return UserService.update_user(actor=actor, user_id=user_id, data={"activo": False})
