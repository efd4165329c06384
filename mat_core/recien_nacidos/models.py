# mat_core/recien_nacidos/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from mat_core.common.models import AuthoredModel
from mat_core.partos.models import Parto


class Sexo(models.TextChoices):
    M = "M", "Masculino"
    F = "F", "Femenino"
    I = "I", "Indeterminado"  # noqa: E741


APGAR_VALIDATORS = [MinValueValidator(0), MaxValueValidator(10)]


class RecienNacido(AuthoredModel):
    parto = models.ForeignKey(Parto, on_delete=models.PROTECT, related_name="recien_nacidos")

    sexo = models.CharField(max_length=1, choices=Sexo.choices)
    peso_nacimiento_gramos = models.PositiveIntegerField(null=True, blank=True)
    talla_cm = models.PositiveSmallIntegerField(null=True, blank=True)
    apgar_1_min = models.PositiveSmallIntegerField(null=True, blank=True, validators=APGAR_VALIDATORS)
    apgar_5_min = models.PositiveSmallIntegerField(null=True, blank=True, validators=APGAR_VALIDATORS)
    es_nacido_vivo = models.BooleanField(default=True)
    observaciones = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "recien_nacidos_recien_nacido"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"RN {self.get_sexo_display()} ({self.parto.madre.rut})"
