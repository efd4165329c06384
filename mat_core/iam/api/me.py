# mat_core/iam/api/me.py

from __future__ import annotations

from rest_framework.views import APIView

from mat_core.common.api.responses import success
from mat_core.iam.gate import authorize


class MeView(APIView):
    def get(self, request):
        """
        Current session plus the permissions resolved right now from the user's roles.
        """
        auth = authorize(request, None, "Usuario", skip_permission_check=True)
        if auth.error is not None:
            return auth.error

        body = auth.session.as_dict()
        body["permissions"] = sorted(auth.permissions)
        return success(body)
