# mat_core/iam/resolver.py
from __future__ import annotations

from typing import Iterable

from mat_core.iam.models import Role, RolePermission, UserPermission


def resolve_permissions(role_names: Iterable[str], *, user_id: int | None = None) -> set[str]:
    """
    Union of the codes granted to the named roles and the codes granted directly to the user.
    Recomputed on every call.
    """
    names = sorted({n for n in (role_names or []) if n})

    codes: set[str] = set()
    if names:
        codes.update(
            RolePermission.objects.filter(role__name__in=names).values_list("permission__code", flat=True)
        )
    if user_id is not None:
        codes.update(
            UserPermission.objects.filter(user_id=user_id).values_list("permission__code", flat=True)
        )
    return codes


def user_role_names(user) -> list[str]:
    return list(
        Role.objects.filter(user_roles__user=user).order_by("name").values_list("name", flat=True)
    )
