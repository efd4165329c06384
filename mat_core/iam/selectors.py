# mat_core/iam/selectors.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet

from mat_core.iam.models import Role


def list_roles() -> QuerySet[Role]:
    return Role.objects.order_by("name")


def list_users(*, role: str | None = None, search: str | None = None, active_only: bool = False) -> QuerySet:
    User = get_user_model()
    qs = User.objects.select_related("profile").prefetch_related("user_roles__role")

    if active_only:
        qs = qs.filter(is_active=True)
    if role:
        qs = qs.filter(user_roles__role__name=role)

    sv = (search or "").strip()
    if sv:
        qs = qs.filter(
            Q(email__icontains=sv)
            | Q(profile__nombre__icontains=sv)
            | Q(profile__rut__icontains=sv)
        )

    return qs.distinct().order_by("profile__nombre", "id")


def list_staff_by_role(role: str) -> QuerySet:
    """
    Active users holding a staff role, ordered by name.
    """
    return list_users(role=role, active_only=True)


def get_user(user_id: int):
    User = get_user_model()
    return User.objects.select_related("profile").prefetch_related("user_roles__role").get(pk=user_id)
