# mat_core/urni/api/views.py
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
from mat_core.iam.gate import authorize_and_audit
from mat_core.urni.api.serializers import (
    AltaURNIInputSerializer,
    EpisodioURNIInputSerializer,
    EpisodioURNISerializer,
)
from mat_core.urni.models import EpisodioURNI
from mat_core.urni.selectors import get_episodio_urni, search_episodios_urni
from mat_core.urni.services import ENTITY, EpisodioURNIService

NOT_FOUND_MSG = "Episodio URNI no encontrado"
READ_PERMISSIONS = ["urni:episodio:view", "urni:read"]


class EpisodioURNIViewSet(viewsets.ViewSet):
    serializer_class = EpisodioURNISerializer
    queryset = EpisodioURNI.objects.none()

    def _get_or_404(self, pk) -> EpisodioURNI:
        try:
            return get_episodio_urni(episodio_id=pk)
        except (EpisodioURNI.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(NOT_FOUND_MSG)

    def list(self, request):
        auth = authorize_and_audit(request, READ_PERMISSIONS, "episodios URNI", audit_entity=ENTITY)
        if auth.error is not None:
            return auth.error

        estado = (request.query_params.get("estado") or "").strip().upper() or None
        if estado and estado not in EpisodeStatus.values:
            raise DomainValidationError("Estado inválido")

        try:
            qs = search_episodios_urni(
                estado=estado,
                rn_id=request.query_params.get("rnId") or None,
                responsable_id=request.query_params.get("responsableId") or None,
                q=request.query_params.get("search"),
            )
        except (DjangoValidationError, ValueError):
            raise DomainValidationError("Parámetros de búsqueda inválidos")

        return paginate(request, qs, EpisodioURNISerializer)

    def create(self, request):
        auth = authorize_and_audit(request, "urni:episodio:create", "episodios URNI", audit_entity=ENTITY)
        if auth.error is not None:
            return auth.error

        ser = EpisodioURNIInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            episodio = EpisodioURNIService.create_episodio(actor=auth.actor, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            EpisodioURNISerializer(get_episodio_urni(episodio_id=episodio.id)).data,
            message="Episodio URNI creado exitosamente",
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        auth = authorize_and_audit(request, READ_PERMISSIONS, "episodios URNI", audit_entity=ENTITY)
        if auth.error is not None:
            return auth.error

        return success(EpisodioURNISerializer(self._get_or_404(pk)).data)

    def update(self, request, pk=None):
        auth = authorize_and_audit(request, "urni:episodio:update", "episodios URNI", audit_entity=ENTITY)
        if auth.error is not None:
            return auth.error

        episodio = self._get_or_404(pk)

        ser = EpisodioURNIInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            episodio = EpisodioURNIService.update_episodio(
                actor=auth.actor, episodio_id=episodio.id, data=ser.validated_data
            )
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            EpisodioURNISerializer(get_episodio_urni(episodio_id=episodio.id)).data,
            message="Episodio URNI actualizado exitosamente",
        )

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)


class AltaURNIView(APIView):
    """
    Discharge a newborn from the neonatal unit.
    """

    @extend_schema(tags=["URNI"], request=AltaURNIInputSerializer, responses={200: EpisodioURNISerializer})
    def post(self, request, pk=None):
        auth = authorize_and_audit(request, "alta:manage", "altas URNI", audit_entity=ENTITY)
        if auth.error is not None:
            return auth.error

        ser = AltaURNIInputSerializer(data=request.data)
        if not ser.is_valid():
            if "fechaHoraAlta" in ser.errors:
                raise DomainValidationError("Fecha/hora de alta inválida")
            raise DomainValidationError("Datos inválidos", details=ser.errors)

        try:
            episodio_id = uuid.UUID(str(pk))
        except ValueError:
            raise NotFoundError(NOT_FOUND_MSG)

        try:
            episodio = EpisodioURNIService.procesar_alta(
                actor=auth.actor,
                episodio_id=episodio_id,
                fecha_hora_alta=ser.validated_data.get("fecha_hora_alta"),
                condicion_egreso=ser.validated_data.get("condicion_egreso"),
            )
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            EpisodioURNISerializer(get_episodio_urni(episodio_id=episodio.id)).data,
            message="Alta URNI procesada exitosamente",
        )
