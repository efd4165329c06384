# mat_core/iam/api/users.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django.contrib.auth import get_user_model
from rest_framework import status, viewsets

from mat_core.common.api.exceptions import (
    DomainValidationError,
    NotFoundError,
    django_validation_message,
    error_response,
)
from mat_core.common.api.pagination import paginate
from mat_core.common.api.responses import success
from mat_core.iam.api.serializers import UserCreateSerializer, UserSerializer, UserUpdateSerializer
from mat_core.iam.gate import authorize, denial_message, has_required
from mat_core.iam.selectors import get_user, list_users
from mat_core.iam.services import UserService

ENTITY = "usuarios"

# URNI forms look up physicians without holding user:view.
URNI_LOOKUP_PERMISSIONS = ["urni:episodio:create", "urni:episodio:update", "urni:read", "urni:episodio:view"]


class UserViewSet(viewsets.ViewSet):
    """
    User administration. Users are soft-deactivated, never deleted.
    """

    serializer_class = UserSerializer
    queryset = get_user_model().objects.none()

    def _get_or_404(self, pk):
        try:
            return get_user(int(pk))
        except (ValueError, TypeError, get_user_model().DoesNotExist):
            raise NotFoundError("Usuario no encontrado")

    def list(self, request):
        role = (request.query_params.get("role") or "").strip() or None

        auth = authorize(request, ["user:view", *URNI_LOOKUP_PERMISSIONS], ENTITY)
        if auth.error is not None:
            return auth.error

        can_view_users = auth.has("user:view")
        urni_lookup = role == "medico" and has_required(auth.permissions, URNI_LOOKUP_PERMISSIONS)
        if not can_view_users and not urni_lookup:
            return error_response(request, denial_message("user:view", ENTITY), status.HTTP_403_FORBIDDEN)

        qs = list_users(
            role=role,
            search=request.query_params.get("search"),
            active_only=not can_view_users,
        )
        return paginate(request, qs, UserSerializer)

    def create(self, request):
        auth = authorize(request, "user:create", ENTITY)
        if auth.error is not None:
            return auth.error

        ser = UserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            user = UserService.create_user(actor=auth.actor, **ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(
            UserSerializer(get_user(user.id)).data,
            message="Usuario creado exitosamente",
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        auth = authorize(request, "user:view", ENTITY)
        if auth.error is not None:
            return auth.error

        return success(UserSerializer(self._get_or_404(pk)).data)

    def update(self, request, pk=None):
        required = ["user:update", "user:manage"] if "activo" in request.data else "user:update"
        auth = authorize(request, required, ENTITY, require_all=True)
        if auth.error is not None:
            return auth.error

        ser = UserUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = self._get_or_404(pk)
        try:
            user = UserService.update_user(actor=auth.actor, user_id=user.id, data=ser.validated_data)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(UserSerializer(get_user(user.id)).data, message="Usuario actualizado exitosamente")

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        auth = authorize(request, ["user:delete", "user:manage"], ENTITY)
        if auth.error is not None:
            return auth.error

        user = self._get_or_404(pk)
        try:
            UserService.deactivate_user(actor=auth.actor, user_id=user.id)
        except DjangoValidationError as e:
            raise DomainValidationError(django_validation_message(e))

        return success(UserSerializer(get_user(user.id)).data, message="Usuario desactivado exitosamente")
