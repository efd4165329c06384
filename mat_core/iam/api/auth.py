# mat_core/iam/api/auth.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from mat_core.common.api.exceptions import error_response
from mat_core.common.api.responses import success
from mat_core.common.env import dev_mode_enabled
from mat_core.iam.api.serializers import (
    DevLoginRequestSerializer,
    LoginRequestSerializer,
    SessionUserSerializer,
    StaffSerializer,
)
from mat_core.iam.services import SessionService
from mat_core.iam.session import clear_session_cookie, read_session, set_session_cookie

DEV_ONLY_MSG = "Endpoint disponible solo en desarrollo"


def _dev_only_or_403(request) -> Response | None:
    """
    Fail closed: unless ENVIRONMENT or NODE_ENV is "development" the request
    is refused before the database is touched.
    """
    if not dev_mode_enabled():
        return error_response(request, DEV_ONLY_MSG, status.HTTP_403_FORBIDDEN)
    return None


class LoginView(APIView):
    authentication_classes = []

    @extend_schema(request=LoginRequestSerializer, responses={200: SessionUserSerializer}, tags=["IAM"])
    def post(self, request):
        email = (request.data.get("email") or "").strip()
        password = request.data.get("password") or ""
        if not email or not password:
            return error_response(request, "Email y contraseña son requeridos", status.HTTP_400_BAD_REQUEST)

        issued = SessionService.login(email=email, password=password, request=request)

        res = success(issued.session.as_dict(), message="Inicio de sesión exitoso")
        set_session_cookie(res, issued.token)
        return res


class LogoutView(APIView):
    authentication_classes = []

    @extend_schema(request=None, responses={200: None}, tags=["IAM"])
    def post(self, request):
        SessionService.logout(session=read_session(request), request=request)

        res = Response({"message": "Sesión cerrada"}, status=status.HTTP_200_OK)
        clear_session_cookie(res)
        return res


class DevLoginView(APIView):
    authentication_classes = []

    @extend_schema(request=DevLoginRequestSerializer, responses={200: SessionUserSerializer}, tags=["IAM"])
    def post(self, request):
        err = _dev_only_or_403(request)
        if err is not None:
            return err

        ser = DevLoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        issued = SessionService.dev_login(
            user_id=ser.validated_data.get("userId"),
            email=ser.validated_data.get("email"),
            request=request,
        )
        res = success(issued.session.as_dict(), message="Sesión de desarrollo iniciada")
        set_session_cookie(res, issued.token)
        return res


class DevUsersView(APIView):
    authentication_classes = []

    @extend_schema(responses={200: StaffSerializer(many=True)}, tags=["IAM"])
    def get(self, request):
        err = _dev_only_or_403(request)
        if err is not None:
            return err

        User = get_user_model()
        users = User.objects.select_related("profile").prefetch_related("user_roles__role").filter(is_active=True)
        data = [
            {
                **StaffSerializer(u).data,
                "roles": sorted(ur.role.name for ur in u.user_roles.all()),
            }
            for u in users.order_by("profile__nombre", "id")
        ]
        return success(data)
