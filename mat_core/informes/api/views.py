# mat_core/informes/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.views import APIView

from mat_core.common.api.exceptions import DomainValidationError, NotFoundError, django_validation_message
from mat_core.common.api.pagination import paginate
from mat_core.common.api.responses import success
from mat_core.episodios.api.serializers import EpisodioMadreSerializer
from mat_core.episodios.api.views import parse_episodio_id
from mat_core.episodios.selectors import get_episodio
from mat_core.iam.gate import authorize
from mat_core.informes.api.serializers import (
    AprobarAltaSerializer,
    EpisodioConInformeSerializer,
    EpisodioPendienteSerializer,
    GenerarInformeSerializer,
    InformeAltaDetailSerializer,
    InformeAltaSerializer,
)
from mat_core.informes.models import InformeAlta
from mat_core.informes.selectors import (
    episodios_con_informe,
    episodios_pendientes_de_informe,
    get_informe_by_episodio,
    list_informes,
)
from mat_core.informes.services import InformeAltaService, ModuloAltaService

INFORMES = "informes de alta"
ALTAS_MEDICAS = "altas médicas"


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "si", "sí", "yes"}


class InformeAltaView(APIView):
    """
    Discharge reports. ?pendientes=true lists open episodes still waiting
    for a report, each with the births it may cover.
    """

    @extend_schema(
        tags=["Informe de Alta"],
        responses={200: InformeAltaSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="pendientes", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY),
        ],
    )
    def get(self, request):
        auth = authorize(request, "informe_alta:generate", INFORMES)
        if auth.error is not None:
            return auth.error

        if _truthy(request.query_params.get("pendientes")):
            return paginate(request, episodios_pendientes_de_informe(), EpisodioPendienteSerializer)
        return paginate(request, list_informes(), InformeAltaSerializer)

    @extend_schema(tags=["Informe de Alta"], request=GenerarInformeSerializer, responses={201: InformeAltaSerializer})
    def post(self, request):
        auth = authorize(request, "informe_alta:generate", INFORMES)
        if auth.error is not None:
            return auth.error

        ser = GenerarInformeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            informe = InformeAltaService.generar(
                actor=auth.actor,
                episodio_id=ser.validated_data.get("episodioId"),
                parto_id=ser.validated_data.get("partoId"),
                formato=ser.validated_data.get("formato"),
            )
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            InformeAltaSerializer(get_informe_by_episodio(episodio_id=informe.episodio_id)).data,
            message="Informe de alta generado exitosamente",
            http_status=status.HTTP_201_CREATED,
        )


class InformeEpisodioView(APIView):
    @extend_schema(tags=["Informe de Alta"], responses={200: InformeAltaDetailSerializer})
    def get(self, request, pk=None):
        auth = authorize(request, ["informe_alta:generate", "modulo_alta:aprobar"], INFORMES)
        if auth.error is not None:
            return auth.error

        try:
            informe = get_informe_by_episodio(episodio_id=parse_episodio_id(pk))
        except (InformeAlta.DoesNotExist, NotFoundError):
            raise NotFoundError("Informe no encontrado para este episodio")

        return success(InformeAltaDetailSerializer(informe).data)


class ModuloAltaListView(APIView):
    """
    Episodes with a generated report, waiting for (or past) medical approval.
    """

    @extend_schema(tags=["Módulo de Alta"], responses={200: EpisodioConInformeSerializer(many=True)})
    def get(self, request):
        auth = authorize(request, "modulo_alta:aprobar", ALTAS_MEDICAS)
        if auth.error is not None:
            return auth.error

        return paginate(request, episodios_con_informe(), EpisodioConInformeSerializer)


class ModuloAltaAprobarView(APIView):
    @extend_schema(tags=["Módulo de Alta"], request=AprobarAltaSerializer, responses={200: EpisodioMadreSerializer})
    def post(self, request, pk=None):
        auth = authorize(request, "modulo_alta:aprobar", ALTAS_MEDICAS)
        if auth.error is not None:
            return auth.error

        episodio_id = parse_episodio_id(pk)

        ser = AprobarAltaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            episodio = ModuloAltaService.aprobar(
                actor=auth.actor,
                episodio_id=episodio_id,
                condicion_egreso=ser.validated_data.get("condicion_egreso"),
            )
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        data = EpisodioMadreSerializer(get_episodio(episodio_id=episodio.id)).data
        data["aprobadoPor"] = auth.session.nombre or auth.session.email
        return success(data, message="Alta médica aprobada exitosamente")
