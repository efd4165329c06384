# mat_core/episodios/services.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService, snapshot
from mat_core.common.api.exceptions import DomainValidationError, NotFoundError
from mat_core.common.models import EpisodeStatus
from mat_core.episodios.models import EpisodioMadre
from mat_core.episodios.selectors import partos_with_newborns
from mat_core.madres.models import Madre

ENTITY = "EpisodioMadre"

EDITABLE_FIELDS = {"fecha_ingreso", "motivo_ingreso", "hospital_anterior"}

NOT_FOUND_MSG = "Episodio no encontrado"
ALREADY_DISCHARGED_MSG = "El episodio ya fue dado de alta"
INCOMPLETE_MSG = "No se puede procesar el alta. Faltan datos requeridos."


def _fecha(parto) -> str:
    if not parto.fecha_hora:
        return "fecha desconocida"
    return timezone.localtime(parto.fecha_hora).strftime("%d-%m-%Y")


def alta_completeness_errors(madre: Madre) -> list[str]:
    """
    Everything a maternal discharge needs on record. Empty list means complete.
    """
    errors = []

    if not madre.rut or not madre.nombres or not madre.apellidos:
        errors.append("La madre debe tener RUT, nombres y apellidos completos")

    partos = list(partos_with_newborns(madre_id=madre.id))
    if not partos:
        errors.append("Debe existir al menos un parto registrado")

    for parto in partos:
        if not parto.fecha_hora or not parto.tipo or not parto.lugar:
            errors.append(f"El parto del {_fecha(parto)} debe tener fecha/hora, tipo y lugar completos")

        recien_nacidos = list(parto.recien_nacidos.all())
        if not recien_nacidos:
            errors.append(f"El parto del {_fecha(parto)} debe tener al menos un recién nacido registrado")
        for rn in recien_nacidos:
            if not rn.sexo:
                errors.append(f"El recién nacido del parto del {_fecha(parto)} debe tener sexo registrado")

    return errors


def _clean(values: dict) -> dict:
    if "motivo_ingreso" in values:
        values["motivo_ingreso"] = (values["motivo_ingreso"] or "").strip()[:300]
    if "hospital_anterior" in values:
        values["hospital_anterior"] = (values["hospital_anterior"] or "").strip()[:200]
    return values


class EpisodioMadreService:
    @staticmethod
    @transaction.atomic
    def create_episodio(*, actor: Actor, data: dict) -> EpisodioMadre:
        values = _clean({k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS})
        madre_id = (data or {}).get("madre_id")
        if not madre_id or not values.get("fecha_ingreso"):
            raise ValidationError("Madre y fecha de ingreso son requeridos")

        madre = Madre.objects.select_for_update().filter(id=madre_id).first()
        if madre is None:
            raise NotFoundError("La madre especificada no existe")
        if madre.episodios.filter(estado=EpisodeStatus.INGRESADO).exists():
            raise ValidationError("La madre ya tiene un episodio de ingreso activo")

        episodio = EpisodioMadre.objects.create(
            madre=madre,
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
    def update_episodio(*, actor: Actor, episodio_id, data: dict) -> EpisodioMadre:
        episodio = EpisodioMadre.objects.select_for_update().get(id=episodio_id)
        if episodio.estado == EpisodeStatus.ALTA:
            raise ValidationError("No se puede editar un episodio que ya fue dado de alta")

        before = snapshot(episodio)
        values = _clean({k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS})
        if "fecha_ingreso" in values and values["fecha_ingreso"] is None:
            raise ValidationError("Fecha de ingreso inválida")

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
    def procesar_alta(*, actor: Actor, episodio_id, condicion_egreso: str | None = None) -> EpisodioMadre:
        """
        INGRESADO -> ALTA after the completeness check.
        Shared by the ingreso/alta route and the discharge approval module.
        """
        episodio = EpisodioMadre.objects.select_for_update().select_related("madre").filter(id=episodio_id).first()
        if episodio is None:
            raise NotFoundError(NOT_FOUND_MSG)
        if episodio.estado != EpisodeStatus.INGRESADO:
            raise ValidationError(ALREADY_DISCHARGED_MSG)

        errors = alta_completeness_errors(episodio.madre)
        if errors:
            raise DomainValidationError(INCOMPLETE_MSG, details={"errors": errors})

        before = snapshot(episodio)

        episodio.estado = EpisodeStatus.ALTA
        episodio.fecha_alta = timezone.now()
        if condicion_egreso:
            episodio.condicion_egreso = condicion_egreso.strip()[:300]
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
