# mat_core/audit/api/views.py
from __future__ import annotations

from django.conf import settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets

from mat_core.audit.api.serializers import AuditEntrySerializer
from mat_core.audit.filters import AuditEntryFilter
from mat_core.audit.models import AuditEntry
from mat_core.audit.selectors import list_audit_entries
from mat_core.common.api.exceptions import error_response
from mat_core.common.api.pagination import paginate
from mat_core.iam.gate import authorize_and_audit


class AuditEntryViewSet(viewsets.GenericViewSet):
    """
    Read-only audit log, newest first.
    """

    serializer_class = AuditEntrySerializer
    queryset = AuditEntry.objects.none()

    @extend_schema(
        tags=["Auditoría"],
        responses={200: AuditEntrySerializer(many=True)},
        parameters=[
            OpenApiParameter(name="usuarioId", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="entidad", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="accion",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="CREATE, UPDATE, DELETE, LOGIN, LOGOUT, PERMISSION_DENIED, ...",
            ),
            OpenApiParameter(name="fechaInicio", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="fechaFin",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Inclusive through the end of the day.",
            ),
            OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
        ],
    )
    def list(self, request):
        auth = authorize_and_audit(request, "auditoria:review", "auditoría", audit_entity="Auditoria")
        if auth.error is not None:
            return auth.error

        f = AuditEntryFilter(request.query_params, queryset=list_audit_entries())
        if not f.is_valid():
            return error_response(
                request,
                "Parámetros de filtro inválidos",
                status.HTTP_400_BAD_REQUEST,
                details=f.errors,
            )

        return paginate(request, f.qs, AuditEntrySerializer, default_limit=settings.AUDIT_DEFAULT_LIMIT)
