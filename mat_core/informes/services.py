# mat_core/informes/services.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import transaction

from mat_core.audit.models import AuditAction
from mat_core.audit.services import Actor, AuditService, snapshot
from mat_core.common.api.exceptions import NotFoundError
from mat_core.common.models import EpisodeStatus
from mat_core.episodios.models import EpisodioMadre
from mat_core.episodios.services import NOT_FOUND_MSG, EpisodioMadreService
from mat_core.informes.models import FormatoInforme, InformeAlta
from mat_core.partos.models import Parto

ENTITY = "InformeAlta"

NO_INFORME_MSG = "El episodio no tiene un informe de alta generado"


def build_contenido(episodio: EpisodioMadre, parto: Parto) -> dict:
    madre = episodio.madre
    return {
        "madre": {
            "id": madre.id,
            "rut": madre.rut,
            "nombres": madre.nombres,
            "apellidos": madre.apellidos,
            "edad": madre.edad,
            "telefono": madre.telefono,
            "direccion": madre.direccion,
        },
        "episodio": {
            "id": episodio.id,
            "fechaIngreso": episodio.fecha_ingreso,
            "motivoIngreso": episodio.motivo_ingreso,
            "estado": episodio.estado,
        },
        "parto": {
            "id": parto.id,
            "fechaHora": parto.fecha_hora,
            "tipo": parto.tipo,
            "lugar": parto.lugar,
            "lugarDetalle": parto.lugar_detalle,
            "complicaciones": parto.complicaciones,
            "observaciones": parto.observaciones,
        },
        "recienNacidos": [
            {
                "id": rn.id,
                "sexo": rn.sexo,
                "pesoNacimientoGramos": rn.peso_nacimiento_gramos,
                "tallaCm": rn.talla_cm,
                "apgar1Min": rn.apgar_1_min,
                "apgar5Min": rn.apgar_5_min,
                "observaciones": rn.observaciones,
            }
            for rn in parto.recien_nacidos.order_by("created_at")
        ],
    }


class InformeAltaService:
    @staticmethod
    @transaction.atomic
    def generar(*, actor: Actor, episodio_id, parto_id, formato: str) -> InformeAlta:
        if not episodio_id or not parto_id or not formato:
            raise ValidationError("Parto, episodio y formato son requeridos")

        formato = formato.upper()
        if formato not in FormatoInforme.values:
            raise ValidationError(f"Formato inválido. Debe ser uno de: {', '.join(FormatoInforme.values)}")

        episodio = EpisodioMadre.objects.select_for_update().select_related("madre").filter(id=episodio_id).first()
        if episodio is None:
            raise NotFoundError(NOT_FOUND_MSG)
        if episodio.estado != EpisodeStatus.INGRESADO:
            raise ValidationError("Solo se pueden generar informes para episodios en estado INGRESADO")
        if InformeAlta.objects.filter(episodio=episodio).exists():
            raise ValidationError("Este episodio ya tiene un informe de alta generado")

        parto = Parto.objects.filter(id=parto_id).first()
        if parto is None:
            raise NotFoundError("Parto no encontrado")
        if parto.madre_id != episodio.madre_id:
            raise ValidationError("El parto no pertenece a la madre del episodio")

        informe = InformeAlta.objects.create(
            episodio=episodio,
            parto=parto,
            formato=formato,
            generado_por_id=actor.user_id,
            contenido=build_contenido(episodio, parto),
        )

        AuditService.record(
            actor=actor,
            accion=AuditAction.CREATE,
            entidad=ENTITY,
            entidad_id=informe.id,
            after=snapshot(informe),
        )
        return informe


class ModuloAltaService:
    @staticmethod
    @transaction.atomic
    def aprobar(*, actor: Actor, episodio_id, condicion_egreso: str | None = None) -> EpisodioMadre:
        """
        Medical approval of a discharge: needs a generated report, then runs
        the regular maternal discharge.
        """
        if not EpisodioMadre.objects.filter(id=episodio_id).exists():
            raise NotFoundError(NOT_FOUND_MSG)
        if not InformeAlta.objects.filter(episodio_id=episodio_id).exists():
            raise ValidationError(NO_INFORME_MSG)

        return EpisodioMadreService.procesar_alta(
            actor=actor,
            episodio_id=episodio_id,
            condicion_egreso=condicion_egreso,
        )
