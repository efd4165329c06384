# mat_core/iam/api/roles.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.views import APIView

from mat_core.common.api.responses import success
from mat_core.iam.api.serializers import RoleSerializer
from mat_core.iam.gate import authorize
from mat_core.iam.selectors import list_roles


class RoleListView(APIView):
    @extend_schema(responses={200: RoleSerializer(many=True)}, tags=["IAM"])
    def get(self, request):
        # reference data: any authenticated user may read it
        auth = authorize(request, None, "Role", skip_permission_check=True)
        if auth.error is not None:
            return auth.error

        return success(RoleSerializer(list_roles(), many=True).data)
