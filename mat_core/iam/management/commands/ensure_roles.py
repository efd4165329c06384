# mat_core/iam/management/commands/ensure_roles.py

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from mat_core.common.env import dev_mode_enabled
from mat_core.iam.catalog import DEV_PASSWORD, DEV_USERS, PERMISSIONS, ROLE_PERMISSIONS, ROLES
from mat_core.iam.models import Permission, Role, RolePermission, UserProfile, UserRole


class Command(BaseCommand):
    help = "Ensure the permission catalogue, system roles and their grants exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--with-users",
            action="store_true",
            help="Also create one active user per role (development only).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        perms = {}
        for code, description in PERMISSIONS.items():
            perm, _ = Permission.objects.update_or_create(code=code, defaults={"description": description})
            perms[code] = perm

        roles = {}
        created = 0
        for name, description in ROLES.items():
            role, was_created = Role.objects.update_or_create(
                name=name,
                defaults={"description": description, "is_system": True},
            )
            roles[name] = role
            created += 1 if was_created else 0

            RolePermission.objects.filter(role=role).exclude(permission__code__in=ROLE_PERMISSIONS[name]).delete()
            for code in ROLE_PERMISSIONS[name]:
                RolePermission.objects.get_or_create(role=role, permission=perms[code])

        self.stdout.write(self.style.SUCCESS(f"Roles ensured. Newly created: {created}"))

        if options["with_users"]:
            if not dev_mode_enabled():
                raise CommandError("--with-users is only available with ENVIRONMENT or NODE_ENV=development")
            self._ensure_users(roles)

    def _ensure_users(self, roles):
        User = get_user_model()
        for data in DEV_USERS:
            user, _ = User.objects.get_or_create(username=data["email"], defaults={"email": data["email"]})
            user.email = data["email"]
            user.is_active = True
            user.set_password(DEV_PASSWORD)
            user.save()

            UserProfile.objects.update_or_create(user=user, defaults={"nombre": data["nombre"], "rut": data["rut"]})
            UserRole.objects.get_or_create(user=user, role=roles[data["role"]])

            self.stdout.write(f"  user {data['email']} ({data['role']})")
