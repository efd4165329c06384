# mat_core/iam/models.py
import uuid

from django.conf import settings
from django.db import models


class Permission(models.Model):
    """
    Atomic capability: e.g. "madre:create", "alta:manage".
    The catalogue is fixed by the seed (see iam/catalog.py).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=128, unique=True)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "iam_permission"
        ordering = ["code"]

    def __str__(self) -> str:
        return self.code


class Role(models.Model):
    """
    Named bundle of permissions (matrona, medico, enfermera, ...).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=64, unique=True)
    description = models.CharField(max_length=255, blank=True)
    is_system = models.BooleanField(default=False)

    class Meta:
        db_table = "iam_role"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class RolePermission(models.Model):
    """
    Many-to-many Role <-> Permission.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="role_permissions")
    permission = models.ForeignKey(Permission, on_delete=models.PROTECT, related_name="permission_roles")

    class Meta:
        db_table = "iam_role_permission"
        constraints = [
            models.UniqueConstraint(fields=["role", "permission"], name="uq_role_permission"),
        ]


class UserProfile(models.Model):
    """
    Hospital identity anchored to Django's AUTH_USER_MODEL.
    email/password/active flag live on the auth user (username == lowercased email).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    nombre = models.CharField(max_length=200)
    rut = models.CharField(max_length=12, unique=True, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_user_profile"

    def __str__(self) -> str:
        return f"{self.nombre} <{self.user.email}>"


class UserRole(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="user_roles")
    role = models.ForeignKey(Role, on_delete=models.PROTECT, related_name="user_roles")

    class Meta:
        db_table = "iam_user_role"
        constraints = [
            models.UniqueConstraint(fields=["user", "role"], name="uq_user_role"),
        ]


class UserPermission(models.Model):
    """
    Direct grant to a single user, on top of what their roles give.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="direct_permissions")
    permission = models.ForeignKey(Permission, on_delete=models.PROTECT, related_name="permission_users")

    class Meta:
        db_table = "iam_user_permission"
        constraints = [
            models.UniqueConstraint(fields=["user", "permission"], name="uq_user_permission"),
        ]
