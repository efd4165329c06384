# mat_core/recien_nacidos/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status, viewsets

from mat_core.common.api.exceptions import DomainValidationError, NotFoundError, django_validation_message
from mat_core.common.api.pagination import paginate
from mat_core.common.api.responses import success
from mat_core.iam.gate import AuthResult, authorize_and_audit
from mat_core.recien_nacidos.api.serializers import RecienNacidoInputSerializer, RecienNacidoSerializer
from mat_core.recien_nacidos.models import RecienNacido
from mat_core.recien_nacidos.selectors import get_recien_nacido, search_recien_nacidos
from mat_core.recien_nacidos.services import ENTITY, RecienNacidoService

NOT_FOUND_MSG = "Recién nacido no encontrado"
DENIAL_ENTITY = "recién nacidos"


def _gate(request, required) -> AuthResult:
    return authorize_and_audit(request, required, DENIAL_ENTITY, audit_entity=ENTITY)


class RecienNacidoViewSet(viewsets.ViewSet):
    serializer_class = RecienNacidoSerializer
    queryset = RecienNacido.objects.none()

    def _get_or_404(self, pk) -> RecienNacido:
        try:
            return get_recien_nacido(rn_id=pk)
        except (RecienNacido.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(NOT_FOUND_MSG)

    def list(self, request):
        auth = _gate(request, "recien-nacido:view")
        if auth.error is not None:
            return auth.error

        try:
            qs = search_recien_nacidos(
                q=request.query_params.get("search"),
                parto_id=request.query_params.get("partoId") or None,
            )
        except DjangoValidationError:
            raise DomainValidationError("partoId inválido")

        return paginate(request, qs, RecienNacidoSerializer)

    def create(self, request):
        auth = _gate(request, "recien-nacido:create")
        if auth.error is not None:
            return auth.error

        ser = RecienNacidoInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            rn = RecienNacidoService.create_recien_nacido(actor=auth.actor, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            RecienNacidoSerializer(get_recien_nacido(rn_id=rn.id)).data,
            message="Recién nacido registrado exitosamente",
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        auth = _gate(request, "recien-nacido:view")
        if auth.error is not None:
            return auth.error

        return success(RecienNacidoSerializer(self._get_or_404(pk)).data)

    def update(self, request, pk=None):
        auth = _gate(request, "recien-nacido:update")
        if auth.error is not None:
            return auth.error

        rn = self._get_or_404(pk)

        ser = RecienNacidoInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            rn = RecienNacidoService.update_recien_nacido(actor=auth.actor, rn_id=rn.id, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            RecienNacidoSerializer(get_recien_nacido(rn_id=rn.id)).data,
            message="Recién nacido actualizado exitosamente",
        )

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        auth = _gate(request, "recien-nacido:delete")
        if auth.error is not None:
            return auth.error

        rn = self._get_or_404(pk)
        RecienNacidoService.delete_recien_nacido(actor=auth.actor, rn_id=rn.id)

        return success({"id": str(rn.id)}, message="Recién nacido eliminado exitosamente")
