# mat_core/audit/services.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models, transaction

from mat_core.audit.models import AuditEntry

logger = logging.getLogger(__name__)


def client_ip(request) -> str | None:
    if request is None:
        return None
    meta = request.META
    return meta.get("HTTP_X_FORWARDED_FOR") or meta.get("HTTP_X_REAL_IP") or None


def user_agent(request) -> str | None:
    if request is None:
        return None
    ua = request.META.get("HTTP_USER_AGENT")
    return ua[:500] if ua else None


def role_label(roles: Iterable[str] | None) -> str | None:
    names = [r for r in (roles or []) if r]
    return ", ".join(names) if names else None


@dataclass(frozen=True)
class Actor:
    """
    Who did it and from where. Built once per request by the auth gate.
    """
    user_id: int | None
    roles: tuple[str, ...] = field(default_factory=tuple)
    ip: str | None = None
    user_agent: str | None = None

    @classmethod
    def from_request(cls, request, *, user_id: int | None, roles: Iterable[str] | None = None) -> "Actor":
        return cls(
            user_id=user_id,
            roles=tuple(roles or ()),
            ip=client_ip(request),
            user_agent=user_agent(request),
        )


def snapshot(instance: models.Model | None) -> Optional[Dict[str, Any]]:
    """
    JSON-safe dump of every concrete column (FKs as <name>_id) plus m2m ids.
    """
    if instance is None:
        return None

    data: Dict[str, Any] = {}
    opts = instance._meta
    for f in opts.concrete_fields:
        data[f.attname] = f.value_from_object(instance)
    if instance.pk is not None:
        for f in opts.many_to_many:
            data[f.name] = sorted(str(pk) for pk in getattr(instance, f.name).values_list("pk", flat=True))

    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


class AuditService:
    """
    Central audit writer.

    record(): same transaction as the caller; a failure aborts the caller's mutation too.
    record_best_effort(): own savepoint; a failure is logged and swallowed.
    """

    @staticmethod
    def record(
        *,
        actor: Actor | None,
        accion: str,
        entidad: str,
        entidad_id: Any = None,
        before: Optional[Dict[str, Any]] = None,
        after: Optional[Dict[str, Any]] = None,
    ) -> AuditEntry:
        return AuditEntry.objects.create(
            usuario_id=actor.user_id if actor else None,
            rol=role_label(actor.roles) if actor else None,
            entidad=entidad,
            entidad_id=str(entidad_id) if entidad_id is not None else None,
            accion=accion,
            detalle_before=before,
            detalle_after=after,
            ip=actor.ip if actor else None,
            user_agent=actor.user_agent if actor else None,
        )

    @staticmethod
    def record_best_effort(**kwargs) -> AuditEntry | None:
        try:
            with transaction.atomic():
                return AuditService.record(**kwargs)
        except Exception:
            logger.exception(
                "Audit write failed (accion=%s entidad=%s)",
                kwargs.get("accion"),
                kwargs.get("entidad"),
            )
            return None
