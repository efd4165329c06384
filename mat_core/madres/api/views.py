# mat_core/madres/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status, viewsets

from mat_core.common.api.exceptions import (
    DomainValidationError,
    NotFoundError,
    django_validation_message,
    error_response,
)
from mat_core.common.api.pagination import paginate
from mat_core.common.api.responses import success
from mat_core.iam.gate import AuthResult, authorize_and_audit
from mat_core.madres.api.serializers import INPUT_FIELD_MAP, MadreInputSerializer, MadreSerializer
from mat_core.madres.models import Madre
from mat_core.madres.selectors import get_madre, search_madres
from mat_core.madres.services import ENTITY, MadreService
from mat_core.partos.api.serializers import PartoSummarySerializer

NOT_FOUND_MSG = "Madre no encontrada"
DENIAL_ENTITY = "madres"


def _gate(request, required) -> AuthResult:
    return authorize_and_audit(request, required, DENIAL_ENTITY, audit_entity=ENTITY)


def _is_limited(auth: AuthResult, action: str) -> bool:
    return auth.has(f"madre:{action}_limited") and not auth.has(f"madre:{action}")


def _limited_fields_or_403(request, auth: AuthResult, action: str):
    """
    *_limited holders may only send the basic identity fields.
    """
    if not _is_limited(auth, action):
        return None
    invalid = [k for k in request.data.keys() if k not in INPUT_FIELD_MAP]
    if invalid:
        return error_response(
            request,
            f"No tiene permisos para establecer los siguientes campos: {', '.join(invalid)}",
            status.HTTP_403_FORBIDDEN,
        )
    return None


class MadreViewSet(viewsets.ViewSet):
    serializer_class = MadreSerializer
    queryset = Madre.objects.none()

    def _get_or_404(self, pk) -> Madre:
        try:
            return get_madre(madre_id=pk)
        except (Madre.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(NOT_FOUND_MSG)

    def list(self, request):
        auth = _gate(request, ["madre:view", "madre:view_limited"])
        if auth.error is not None:
            return auth.error

        qs = search_madres(q=request.query_params.get("search"))
        return paginate(request, qs, MadreSerializer)

    def create(self, request):
        auth = _gate(request, ["madre:create", "madre:create_limited"])
        if auth.error is not None:
            return auth.error

        err = _limited_fields_or_403(request, auth, "create")
        if err is not None:
            return err

        ser = MadreInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            madre = MadreService.create_madre(actor=auth.actor, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            MadreSerializer(madre).data,
            message="Madre registrada exitosamente",
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        auth = _gate(request, ["madre:view", "madre:view_limited"])
        if auth.error is not None:
            return auth.error

        madre = self._get_or_404(pk)
        data = MadreSerializer(madre).data
        if not _is_limited(auth, "view"):
            recientes = madre.partos.select_related("madre").order_by("-fecha_hora")[:10]
            data["partos"] = PartoSummarySerializer(recientes, many=True).data
        return success(data)

    def update(self, request, pk=None):
        auth = _gate(request, ["madre:update", "madre:update_limited"])
        if auth.error is not None:
            return auth.error

        err = _limited_fields_or_403(request, auth, "update")
        if err is not None:
            return err

        madre = self._get_or_404(pk)

        ser = MadreInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            madre = MadreService.update_madre(actor=auth.actor, madre_id=madre.id, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(MadreSerializer(madre).data, message="Madre actualizada exitosamente")

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        auth = _gate(request, ["madre:delete", "madre:delete_limited"])
        if auth.error is not None:
            return auth.error

        madre = self._get_or_404(pk)
        MadreService.delete_madre(actor=auth.actor, madre_id=madre.id)

        return success({"id": str(madre.id)}, message="Madre eliminada exitosamente")
