# mat_core/recien_nacidos/services.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import transaction

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService, snapshot
from mat_core.common.api.exceptions import ConflictError, NotFoundError
from mat_core.partos.models import Parto
from mat_core.recien_nacidos.models import RecienNacido, Sexo

ENTITY = "RecienNacido"

EDITABLE_FIELDS = {
    "parto_id",
    "sexo",
    "peso_nacimiento_gramos",
    "talla_cm",
    "apgar_1_min",
    "apgar_5_min",
    "es_nacido_vivo",
    "observaciones",
}


def _validate(values: dict) -> None:
    if "sexo" in values and values["sexo"] not in Sexo.values:
        raise ValidationError("Sexo inválido. Valores válidos: M, F, I")
    for field, label in (("apgar_1_min", "1'"), ("apgar_5_min", "5'")):
        v = values.get(field)
        if v is not None and not 0 <= v <= 10:
            raise ValidationError(f"El Apgar {label} debe ser un número entre 0 y 10")
    if "observaciones" in values:
        values["observaciones"] = (values["observaciones"] or "").strip()[:500]


def _ensure_parto(parto_id) -> None:
    if not Parto.objects.filter(id=parto_id).exists():
        raise NotFoundError("El parto especificado no existe")


class RecienNacidoService:
    @staticmethod
    @transaction.atomic
    def create_recien_nacido(*, actor: Actor, data: dict) -> RecienNacido:
        values = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
        if not values.get("parto_id") or not values.get("sexo"):
            raise ValidationError("Parto y sexo son requeridos")

        _ensure_parto(values["parto_id"])
        _validate(values)
        if values.get("es_nacido_vivo") is None:
            values["es_nacido_vivo"] = True

        rn = RecienNacido.objects.create(created_by_id=actor.user_id, **values)

        AuditService.record(
            actor=actor,
            accion=AuditAction.CREATE,
            entidad=ENTITY,
            entidad_id=rn.id,
            after=snapshot(rn),
        )
        return rn

    @staticmethod
    @transaction.atomic
    def update_recien_nacido(*, actor: Actor, rn_id, data: dict) -> RecienNacido:
        rn = RecienNacido.objects.select_for_update().get(id=rn_id)
        before = snapshot(rn)

        values = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
        if "parto_id" in values:
            _ensure_parto(values["parto_id"])
        if "sexo" in values and not values["sexo"]:
            raise ValidationError("Parto y sexo son requeridos")
        _validate(values)
        if "es_nacido_vivo" in values and values["es_nacido_vivo"] is None:
            values.pop("es_nacido_vivo")

        for k, v in values.items():
            setattr(rn, k, v)
        rn.updated_by_id = actor.user_id
        rn.save()

        AuditService.record(
            actor=actor,
            accion=AuditAction.UPDATE,
            entidad=ENTITY,
            entidad_id=rn.id,
            before=before,
            after=snapshot(rn),
        )
        return rn

    @staticmethod
    @transaction.atomic
    def delete_recien_nacido(*, actor: Actor, rn_id) -> None:
        rn = RecienNacido.objects.select_for_update().get(id=rn_id)

        if rn.episodios_urni.exists():
            raise ConflictError("No se puede eliminar el recién nacido porque tiene episodios URNI registrados")

        before = snapshot(rn)
        entity_id = rn.id
        rn.delete()

        AuditService.record(
            actor=actor,
            accion=AuditAction.DELETE,
            entidad=ENTITY,
            entidad_id=entity_id,
            before=before,
        )
