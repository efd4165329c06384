# mat_core/madres/services.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import transaction

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService, snapshot
from mat_core.common.api.exceptions import ConflictError
from mat_core.common.rut import RUT_FORMAT_MSG, is_valid_rut, normalize_rut
from mat_core.madres.models import Madre

ENTITY = "Madre"

# What a *_limited permission may write.
BASIC_FIELDS = {
    "rut",
    "nombres",
    "apellidos",
    "edad",
    "fecha_nacimiento",
    "direccion",
    "telefono",
    "ficha_clinica",
}


def _clean_rut(rut: str) -> str:
    if not is_valid_rut(rut):
        raise ValidationError(RUT_FORMAT_MSG)
    return normalize_rut(rut)


def _check_unique(*, rut: str | None, ficha_clinica: str | None, exclude_id=None) -> None:
    if rut:
        qs = Madre.objects.filter(rut=rut)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("Ya existe una madre registrada con este RUT")
    if ficha_clinica:
        qs = Madre.objects.filter(ficha_clinica=ficha_clinica)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("Ya existe una madre registrada con esta ficha clínica")


class MadreService:
    @staticmethod
    @transaction.atomic
    def create_madre(*, actor: Actor, data: dict) -> Madre:
        updates = {k: v for k, v in (data or {}).items() if k in BASIC_FIELDS}
        if not updates.get("rut") or not updates.get("nombres") or not updates.get("apellidos"):
            raise ValidationError("RUT, nombres y apellidos son requeridos")

        updates["rut"] = _clean_rut(updates["rut"])
        updates["ficha_clinica"] = (updates.get("ficha_clinica") or "").strip() or None
        _check_unique(rut=updates["rut"], ficha_clinica=updates["ficha_clinica"])

        madre = Madre.objects.create(created_by_id=actor.user_id, **updates)

        AuditService.record(
            actor=actor,
            accion=AuditAction.CREATE,
            entidad=ENTITY,
            entidad_id=madre.id,
            after=snapshot(madre),
        )
        return madre

    @staticmethod
    @transaction.atomic
    def update_madre(*, actor: Actor, madre_id, data: dict) -> Madre:
        madre = Madre.objects.select_for_update().get(id=madre_id)
        before = snapshot(madre)

        updates = {k: v for k, v in (data or {}).items() if k in BASIC_FIELDS}
        if "rut" in updates:
            updates["rut"] = _clean_rut(updates["rut"] or "")
        if "ficha_clinica" in updates:
            updates["ficha_clinica"] = (updates["ficha_clinica"] or "").strip() or None
        for required in ("nombres", "apellidos"):
            if required in updates and not (updates[required] or "").strip():
                raise ValidationError("RUT, nombres y apellidos son requeridos")

        _check_unique(
            rut=updates.get("rut"),
            ficha_clinica=updates.get("ficha_clinica"),
            exclude_id=madre.id,
        )

        for k, v in updates.items():
            setattr(madre, k, v)
        madre.updated_by_id = actor.user_id
        madre.save()

        AuditService.record(
            actor=actor,
            accion=AuditAction.UPDATE,
            entidad=ENTITY,
            entidad_id=madre.id,
            before=before,
            after=snapshot(madre),
        )
        return madre

    @staticmethod
    @transaction.atomic
    def delete_madre(*, actor: Actor, madre_id) -> None:
        madre = Madre.objects.select_for_update().get(id=madre_id)

        if madre.partos.exists():
            raise ConflictError("No se puede eliminar la madre porque tiene partos registrados")
        if madre.episodios.exists():
            raise ConflictError("No se puede eliminar la madre porque tiene episodios de ingreso registrados")

        before = snapshot(madre)
        entity_id = madre.id
        madre.delete()

        AuditService.record(
            actor=actor,
            accion=AuditAction.DELETE,
            entidad=ENTITY,
            entidad_id=entity_id,
            before=before,
        )
