# mat_core/partos/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.views import APIView

from mat_core.common.api.exceptions import (
    DomainValidationError,
    NotFoundError,
    django_validation_message,
    error_response,
)
from mat_core.common.api.pagination import paginate
from mat_core.common.api.responses import success
from mat_core.iam.api.serializers import StaffSerializer
from mat_core.iam.catalog import STAFF_ROLES
from mat_core.iam.gate import AuthResult, authorize, authorize_and_audit
from mat_core.iam.selectors import list_staff_by_role
from mat_core.partos.api.serializers import PartoInputSerializer, PartoSerializer
from mat_core.partos.models import Parto
from mat_core.partos.selectors import get_parto, search_partos
from mat_core.partos.services import ENTITY, Equipo, PartoService

NOT_FOUND_MSG = "Parto no encontrado"
DENIAL_ENTITY = "partos"


def _gate(request, required) -> AuthResult:
    return authorize_and_audit(request, required, DENIAL_ENTITY, audit_entity=ENTITY)


def _split_equipo(validated: dict) -> tuple[dict, Equipo]:
    data = dict(validated)
    equipo = Equipo(
        matronas=data.pop("matronasIds", None),
        medicos=data.pop("medicosIds", None),
        enfermeras=data.pop("enfermerasIds", None),
    )
    return data, equipo


class PartoViewSet(viewsets.ViewSet):
    serializer_class = PartoSerializer
    queryset = Parto.objects.none()

    def _get_or_404(self, pk) -> Parto:
        try:
            return get_parto(parto_id=pk)
        except (Parto.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(NOT_FOUND_MSG)

    def list(self, request):
        auth = _gate(request, "parto:view")
        if auth.error is not None:
            return auth.error

        try:
            qs = search_partos(
                q=request.query_params.get("search"),
                madre_id=request.query_params.get("madreId") or None,
            )
        except DjangoValidationError:
            raise DomainValidationError("madreId inválido")

        return paginate(request, qs, PartoSerializer)

    def create(self, request):
        auth = _gate(request, "parto:create")
        if auth.error is not None:
            return auth.error

        ser = PartoInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data, equipo = _split_equipo(ser.validated_data)

        try:
            parto = PartoService.create_parto(actor=auth.actor, data=data, equipo=equipo)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            PartoSerializer(get_parto(parto_id=parto.id)).data,
            message="Parto registrado exitosamente",
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        auth = _gate(request, "parto:view")
        if auth.error is not None:
            return auth.error

        parto = self._get_or_404(pk)
        data = PartoSerializer(parto).data
        data["recienNacidos"] = [
            {"id": str(rn.id), "sexo": rn.sexo, "pesoNacimientoGramos": rn.peso_nacimiento_gramos}
            for rn in parto.recien_nacidos.order_by("created_at")
        ]
        return success(data)

    def update(self, request, pk=None):
        auth = _gate(request, "parto:update")
        if auth.error is not None:
            return auth.error

        parto = self._get_or_404(pk)

        ser = PartoInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data, equipo = _split_equipo(ser.validated_data)

        try:
            parto = PartoService.update_parto(actor=auth.actor, parto_id=parto.id, data=data, equipo=equipo)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(PartoSerializer(get_parto(parto_id=parto.id)).data, message="Parto actualizado exitosamente")

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        auth = _gate(request, "parto:delete")
        if auth.error is not None:
            return auth.error

        parto = self._get_or_404(pk)
        PartoService.delete_parto(actor=auth.actor, parto_id=parto.id)

        return success({"id": str(parto.id)}, message="Parto eliminado exitosamente")


class ProfesionalesView(APIView):
    """
    Staff lookup for the birth form: active users of one staff role.
    """

    @extend_schema(
        tags=["Partos"],
        responses={200: StaffSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="role",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description="matrona, medico or enfermera.",
            ),
        ],
    )
    def get(self, request):
        auth = authorize(request, ["parto:create", "parto:update"], "profesionales")
        if auth.error is not None:
            return auth.error

        role = (request.query_params.get("role") or "").strip()
        if role not in STAFF_ROLES:
            return error_response(
                request,
                f"Rol inválido. Debe ser uno de: {', '.join(STAFF_ROLES)}",
                status.HTTP_400_BAD_REQUEST,
            )

        return success(StaffSerializer(list_staff_by_role(role), many=True).data)
