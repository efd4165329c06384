# mat_core/urni/models.py
from django.conf import settings
from django.db import models

from mat_core.common.models import AuthoredModel, EpisodeStatus
from mat_core.recien_nacidos.models import RecienNacido


class ServicioUnidad(models.TextChoices):
    URNI = "URNI", "URNI"
    UCIN = "UCIN", "UCIN"
    NEONATOLOGIA = "NEONATOLOGIA", "Neonatología"


class EpisodioURNI(AuthoredModel):
    """
    Newborn stay in the neonatal unit. INGRESADO -> ALTA, never back.
    """
    recien_nacido = models.ForeignKey(RecienNacido, on_delete=models.PROTECT, related_name="episodios_urni")

    fecha_hora_ingreso = models.DateTimeField(db_index=True)
    motivo_ingreso = models.CharField(max_length=300, blank=True, default="")
    servicio_unidad = models.CharField(max_length=16, choices=ServicioUnidad.choices, null=True, blank=True)
    responsable_clinico = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="episodios_urni_responsable",
        null=True,
        blank=True,
    )

    estado = models.CharField(
        max_length=16,
        choices=EpisodeStatus.choices,
        default=EpisodeStatus.INGRESADO,
        db_index=True,
    )
    fecha_hora_alta = models.DateTimeField(null=True, blank=True)
    condicion_egreso = models.CharField(max_length=300, blank=True, default="")

    class Meta:
        db_table = "urni_episodio"
        ordering = ["-fecha_hora_ingreso"]
        indexes = [
            models.Index(fields=["recien_nacido", "estado"]),
        ]

    def __str__(self) -> str:
        return f"URNI {self.estado} {self.fecha_hora_ingreso:%Y-%m-%d %H:%M}"
