# mat_core/episodios/api/views.py
from __future__ import annotations

import uuid

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.views import APIView

from mat_core.common.api.exceptions import DomainValidationError, NotFoundError, django_validation_message
from mat_core.common.api.pagination import paginate
from mat_core.common.api.responses import success
from mat_core.common.models import EpisodeStatus
from mat_core.episodios.api.serializers import (
    AltaInputSerializer,
    EpisodioMadreDetailSerializer,
    EpisodioMadreInputSerializer,
    EpisodioMadreSerializer,
    PartoWithNewbornsSerializer,
)
from mat_core.episodios.models import EpisodioMadre
from mat_core.episodios.selectors import get_episodio, partos_with_newborns, search_episodios
from mat_core.episodios.services import (
    ENTITY,
    NOT_FOUND_MSG,
    EpisodioMadreService,
    alta_completeness_errors,
)
from mat_core.iam.gate import authorize, authorize_and_audit

DENIAL_ENTITY = "ingresos/altas"


def parse_episodio_id(pk) -> uuid.UUID:
    try:
        return uuid.UUID(str(pk))
    except ValueError:
        raise NotFoundError(NOT_FOUND_MSG)


class EpisodioMadreViewSet(viewsets.ViewSet):
    serializer_class = EpisodioMadreSerializer
    queryset = EpisodioMadre.objects.none()

    def _get_or_404(self, pk) -> EpisodioMadre:
        try:
            return get_episodio(episodio_id=parse_episodio_id(pk))
        except EpisodioMadre.DoesNotExist:
            raise NotFoundError(NOT_FOUND_MSG)

    def list(self, request):
        auth = authorize_and_audit(
            request, ["ingreso_alta:view", "ingreso_alta:manage"], DENIAL_ENTITY, audit_entity=ENTITY
        )
        if auth.error is not None:
            return auth.error

        estado = (request.query_params.get("estado") or "").strip().upper() or None
        if estado and estado not in EpisodeStatus.values:
            raise DomainValidationError("Estado inválido")

        qs = search_episodios(q=request.query_params.get("search"), estado=estado)
        return paginate(request, qs, EpisodioMadreSerializer)

    def create(self, request):
        auth = authorize_and_audit(
            request, ["ingreso_alta:create", "ingreso_alta:manage"], "ingresos", audit_entity=ENTITY
        )
        if auth.error is not None:
            return auth.error

        ser = EpisodioMadreInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            episodio = EpisodioMadreService.create_episodio(actor=auth.actor, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            EpisodioMadreSerializer(get_episodio(episodio_id=episodio.id)).data,
            message="Ingreso registrado exitosamente",
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        auth = authorize_and_audit(
            request, ["ingreso_alta:view", "ingreso_alta:manage"], DENIAL_ENTITY, audit_entity=ENTITY
        )
        if auth.error is not None:
            return auth.error

        episodio = self._get_or_404(pk)
        data = EpisodioMadreDetailSerializer(episodio).data
        data["partos"] = PartoWithNewbornsSerializer(partos_with_newborns(madre_id=episodio.madre_id), many=True).data

        # discharge readiness, only meaningful while the episode is open
        if episodio.estado == EpisodeStatus.INGRESADO:
            errors = alta_completeness_errors(episodio.madre)
            data["validation"] = {"isValid": not errors, "errors": errors}
        else:
            data["validation"] = None

        return success(data)

    def update(self, request, pk=None):
        auth = authorize(request, ["ingreso_alta:update", "ingreso_alta:manage"], DENIAL_ENTITY)
        if auth.error is not None:
            return auth.error

        episodio = self._get_or_404(pk)

        ser = EpisodioMadreInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            episodio = EpisodioMadreService.update_episodio(
                actor=auth.actor, episodio_id=episodio.id, data=ser.validated_data
            )
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            EpisodioMadreSerializer(get_episodio(episodio_id=episodio.id)).data,
            message="Episodio actualizado exitosamente",
        )

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)


class AltaEpisodioView(APIView):
    """
    Maternal discharge. Refused with the list of missing data when the
    record is incomplete.
    """

    @extend_schema(tags=["Ingreso/Alta"], request=AltaInputSerializer, responses={200: EpisodioMadreSerializer})
    def post(self, request, pk=None):
        auth = authorize_and_audit(
            request, ["ingreso_alta:alta", "ingreso_alta:manage"], "episodios", audit_entity=ENTITY
        )
        if auth.error is not None:
            return auth.error

        episodio_id = parse_episodio_id(pk)

        ser = AltaInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            episodio = EpisodioMadreService.procesar_alta(
                actor=auth.actor,
                episodio_id=episodio_id,
                condicion_egreso=ser.validated_data.get("condicion_egreso"),
            )
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            EpisodioMadreSerializer(get_episodio(episodio_id=episodio.id)).data,
            message="Alta procesada exitosamente",
        )
