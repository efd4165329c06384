# mat_core/urni/services.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService, snapshot
from mat_core.common.api.exceptions import NotFoundError
from mat_core.common.models import EpisodeStatus
from mat_core.recien_nacidos.models import RecienNacido
from mat_core.urni.models import EpisodioURNI, ServicioUnidad

ENTITY = "EpisodioURNI"

EDITABLE_FIELDS = {
    "fecha_hora_ingreso",
    "motivo_ingreso",
    "servicio_unidad",
    "responsable_clinico_id",
}

ALREADY_DISCHARGED_MSG = "El episodio URNI ya fue dado de alta"
ALTA_BEFORE_INGRESO_MSG = "La fecha/hora de alta no puede ser anterior a la fecha/hora de ingreso"


def _clip(value: str | None, size: int = 300) -> str:
    return (value or "").strip()[:size]


def _validate(values: dict) -> None:
    if values.get("servicio_unidad") and values["servicio_unidad"] not in ServicioUnidad.values:
        raise ValidationError("Servicio/unidad inválido")
    if values.get("responsable_clinico_id"):
        if not get_user_model().objects.filter(id=values["responsable_clinico_id"]).exists():
            raise NotFoundError("El responsable clínico especificado no existe")
    if "motivo_ingreso" in values:
        values["motivo_ingreso"] = _clip(values["motivo_ingreso"])


class EpisodioURNIService:
    @staticmethod
    @transaction.atomic
    def create_episodio(*, actor: Actor, data: dict) -> EpisodioURNI:
        values = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
        rn_id = (data or {}).get("recien_nacido_id")
        if not rn_id or not values.get("fecha_hora_ingreso"):
            raise ValidationError("Recién nacido y fecha/hora de ingreso son requeridos")

        # concurrent admissions of one newborn serialize on this row lock
        rn = RecienNacido.objects.select_for_update().filter(id=rn_id).first()
        if rn is None:
            raise NotFoundError("El recién nacido especificado no existe")
        if rn.episodios_urni.filter(estado=EpisodeStatus.INGRESADO).exists():
            raise ValidationError("El recién nacido ya tiene un episodio URNI activo")

        _validate(values)
        episodio = EpisodioURNI.objects.create(
            recien_nacido=rn,
            estado=EpisodeStatus.INGRESADO,
            created_by_id=actor.user_id,
            **values,
        )

        AuditService.record(
            actor=actor,
            accion=AuditAction.CREATE,
            entidad=ENTITY,
            entidad_id=episodio.id,
            after=snapshot(episodio),
        )
        return episodio

    @staticmethod
    @transaction.atomic
    def update_episodio(*, actor: Actor, episodio_id, data: dict) -> EpisodioURNI:
        episodio = EpisodioURNI.objects.select_for_update().get(id=episodio_id)
        if episodio.estado == EpisodeStatus.ALTA:
            raise ValidationError("No se puede actualizar un episodio que ya fue dado de alta")

        before = snapshot(episodio)
        values = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
        if "fecha_hora_ingreso" in values and values["fecha_hora_ingreso"] is None:
            raise ValidationError("Fecha/hora de ingreso inválida")
        _validate(values)

        for k, v in values.items():
            setattr(episodio, k, v)
        episodio.updated_by_id = actor.user_id
        episodio.save()

        AuditService.record(
            actor=actor,
            accion=AuditAction.UPDATE,
            entidad=ENTITY,
            entidad_id=episodio.id,
            before=before,
            after=snapshot(episodio),
        )
        return episodio

    @staticmethod
    @transaction.atomic
    def procesar_alta(
        *,
        actor: Actor,
        episodio_id,
        fecha_hora_alta=None,
        condicion_egreso: str | None = None,
    ) -> EpisodioURNI:
        """
        INGRESADO -> ALTA. The row lock makes a concurrent second discharge
        see ALTA and fail instead of overwriting the first.
        """
        episodio = EpisodioURNI.objects.select_for_update().filter(id=episodio_id).first()
        if episodio is None:
            raise NotFoundError("Episodio URNI no encontrado")
        if episodio.estado != EpisodeStatus.INGRESADO:
            raise ValidationError(ALREADY_DISCHARGED_MSG)

        alta = fecha_hora_alta or timezone.now()
        if alta < episodio.fecha_hora_ingreso:
            raise ValidationError(ALTA_BEFORE_INGRESO_MSG)

        before = snapshot(episodio)

        episodio.estado = EpisodeStatus.ALTA
        episodio.fecha_hora_alta = alta
        if condicion_egreso:
            episodio.condicion_egreso = _clip(condicion_egreso)
        episodio.updated_by_id = actor.user_id
        episodio.save()

        AuditService.record(
            actor=actor,
            accion=AuditAction.UPDATE,
            entidad=ENTITY,
            entidad_id=episodio.id,
            before=before,
            after=snapshot(episodio),
        )
        return episodio
