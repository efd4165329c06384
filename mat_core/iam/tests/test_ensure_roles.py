# mat_core/iam/tests/test_ensure_roles.py
import pytest
from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command

from mat_core.iam.catalog import DEV_USERS, ROLE_PERMISSIONS
from mat_core.iam.models import Permission, Role, RolePermission
from mat_core.iam.resolver import resolve_permissions

pytestmark = pytest.mark.django_db


def test_idempotent():
    call_command("ensure_roles", verbosity=0)
    call_command("ensure_roles", verbosity=0)

    assert Role.objects.count() == 6
    assert RolePermission.objects.count() == sum(len(codes) for codes in ROLE_PERMISSIONS.values())


def test_stale_grants_are_removed():
    call_command("ensure_roles", verbosity=0)
    role = Role.objects.get(name="enfermera")
    RolePermission.objects.create(role=role, permission=Permission.objects.get(code="auditoria:review"))

    call_command("ensure_roles", verbosity=0)

    assert resolve_permissions(["enfermera"]) == set(ROLE_PERMISSIONS["enfermera"])


def test_with_users_requires_development(settings):
    settings.ENVIRONMENT = "production"
    settings.NODE_ENV = ""

    with pytest.raises(CommandError):
        call_command("ensure_roles", "--with-users", verbosity=0)


def test_with_users_in_development(settings):
    settings.ENVIRONMENT = "development"

    call_command("ensure_roles", "--with-users", verbosity=0)
    call_command("ensure_roles", "--with-users", verbosity=0)

    emails = set(get_user_model().objects.values_list("email", flat=True))
    assert emails == {u["email"] for u in DEV_USERS}
