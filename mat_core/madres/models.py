# mat_core/madres/models.py
from django.db import models

from mat_core.common.models import AuthoredModel


class Madre(AuthoredModel):
    """
    Root entity of a maternity episode.
    """
    rut = models.CharField(max_length=12, unique=True)  # 12345678-K, uppercase DV
    nombres = models.CharField(max_length=120)
    apellidos = models.CharField(max_length=120)
    edad = models.PositiveSmallIntegerField(null=True, blank=True)
    fecha_nacimiento = models.DateField(null=True, blank=True)
    direccion = models.CharField(max_length=255, blank=True, default="")
    telefono = models.CharField(max_length=32, blank=True, default="")
    ficha_clinica = models.CharField(max_length=64, unique=True, null=True, blank=True)

    class Meta:
        db_table = "madres_madre"
        ordering = ["apellidos", "nombres"]

    def __str__(self) -> str:
        return f"{self.nombres} {self.apellidos} ({self.rut})"

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombres} {self.apellidos}".strip()
