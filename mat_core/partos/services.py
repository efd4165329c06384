# mat_core/partos/services.py
from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService, snapshot
from mat_core.common.api.exceptions import ConflictError
from mat_core.madres.models import Madre
from mat_core.partos.models import CESAREAS, LugarParto, Parto, TipoParto

ENTITY = "Parto"

EDITABLE_FIELDS = {
    "madre_id",
    "fecha_hora",
    "tipo",
    "lugar",
    "lugar_detalle",
    "curso",
    "inicio",
    "edad_gestacional_semanas",
    "conduccion_oxitocica",
    "episiotomia",
    "acompanante_durante_trabajo",
    "ligadura_tardia_cordon",
    "contacto_piel_piel_madre_30min",
    "complicaciones",
    "observaciones",
}


@dataclass
class Equipo:
    """
    Attending staff by role. None means "leave as is" on update.
    """
    matronas: list[int] | None = None
    medicos: list[int] | None = None
    enfermeras: list[int] | None = None


def _validate_fecha(fecha_hora) -> None:
    if fecha_hora is None:
        raise ValidationError("Madre, fecha/hora, tipo de parto y lugar son requeridos")
    if fecha_hora > timezone.now():
        raise ValidationError("La fecha y hora del parto no puede ser mayor que la fecha y hora actual")


def _validate_enums(tipo, lugar) -> None:
    if tipo not in TipoParto.values:
        raise ValidationError("Tipo de parto inválido")
    if lugar not in LugarParto.values:
        raise ValidationError("Lugar de parto inválido")


def _validate_staff_role(ids: list[int], role: str, plural: str) -> None:
    if not ids:
        return
    User = get_user_model()
    found = User.objects.filter(id__in=ids, user_roles__role__name=role).distinct().count()
    if found != len(set(ids)):
        raise ValidationError(f"Una o más {plural} especificadas no existen o no tienen el rol correcto")


def _validate_equipo(*, tipo: str, matronas: list[int], medicos: list[int], enfermeras: list[int]) -> None:
    if not matronas:
        raise ValidationError("Debe seleccionar al menos una matrona")
    if not enfermeras:
        raise ValidationError("Debe seleccionar al menos una enfermera")
    if tipo in CESAREAS and not medicos:
        raise ValidationError("Debe seleccionar al menos un médico cuando el tipo de parto es cesárea")

    _validate_staff_role(matronas, "matrona", "matronas")
    _validate_staff_role(medicos, "medico", "médicos")
    _validate_staff_role(enfermeras, "enfermera", "enfermeras")


class PartoService:
    @staticmethod
    @transaction.atomic
    def create_parto(*, actor: Actor, data: dict, equipo: Equipo) -> Parto:
        values = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}

        if not values.get("madre_id") or not values.get("tipo") or not values.get("lugar"):
            raise ValidationError("Madre, fecha/hora, tipo de parto y lugar son requeridos")
        if not Madre.objects.filter(id=values["madre_id"]).exists():
            raise ValidationError("La madre especificada no existe")

        _validate_fecha(values.get("fecha_hora"))
        _validate_enums(values["tipo"], values["lugar"])
        if values["lugar"] != LugarParto.OTRO:
            values["lugar_detalle"] = ""

        matronas = equipo.matronas or []
        medicos = equipo.medicos or []
        enfermeras = equipo.enfermeras or []
        _validate_equipo(tipo=values["tipo"], matronas=matronas, medicos=medicos, enfermeras=enfermeras)

        parto = Parto.objects.create(created_by_id=actor.user_id, **values)
        parto.matronas.set(matronas)
        parto.medicos.set(medicos)
        parto.enfermeras.set(enfermeras)

        AuditService.record(
            actor=actor,
            accion=AuditAction.CREATE,
            entidad=ENTITY,
            entidad_id=parto.id,
            after=snapshot(parto),
        )
        return parto

    @staticmethod
    @transaction.atomic
    def update_parto(*, actor: Actor, parto_id, data: dict, equipo: Equipo) -> Parto:
        parto = Parto.objects.select_for_update().get(id=parto_id)
        before = snapshot(parto)

        values = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
        if "madre_id" in values and not Madre.objects.filter(id=values["madre_id"]).exists():
            raise ValidationError("La madre especificada no existe")
        if "fecha_hora" in values:
            _validate_fecha(values["fecha_hora"])

        tipo = values.get("tipo", parto.tipo)
        lugar = values.get("lugar", parto.lugar)
        _validate_enums(tipo, lugar)
        if lugar != LugarParto.OTRO:
            values["lugar_detalle"] = ""

        matronas = equipo.matronas if equipo.matronas is not None else list(parto.matronas.values_list("id", flat=True))
        medicos = equipo.medicos if equipo.medicos is not None else list(parto.medicos.values_list("id", flat=True))
        enfermeras = (
            equipo.enfermeras
            if equipo.enfermeras is not None
            else list(parto.enfermeras.values_list("id", flat=True))
        )
        _validate_equipo(tipo=tipo, matronas=matronas, medicos=medicos, enfermeras=enfermeras)

        for k, v in values.items():
            setattr(parto, k, v)
        parto.updated_by_id = actor.user_id
        parto.save()
        parto.matronas.set(matronas)
        parto.medicos.set(medicos)
        parto.enfermeras.set(enfermeras)

        AuditService.record(
            actor=actor,
            accion=AuditAction.UPDATE,
            entidad=ENTITY,
            entidad_id=parto.id,
            before=before,
            after=snapshot(parto),
        )
        return parto

    @staticmethod
    @transaction.atomic
    def delete_parto(*, actor: Actor, parto_id) -> None:
        parto = Parto.objects.select_for_update().get(id=parto_id)

        if parto.recien_nacidos.exists():
            raise ConflictError("No se puede eliminar el parto porque tiene recién nacidos registrados")
        if parto.informes.exists():
            raise ConflictError("No se puede eliminar el parto porque tiene un informe de alta asociado")

        before = snapshot(parto)
        entity_id = parto.id
        parto.delete()

        AuditService.record(
            actor=actor,
            accion=AuditAction.DELETE,
            entidad=ENTITY,
            entidad_id=entity_id,
            before=before,
        )
