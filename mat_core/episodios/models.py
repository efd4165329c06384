# mat_core/episodios/models.py
from django.db import models

from mat_core.common.models import AuthoredModel, EpisodeStatus
from mat_core.madres.models import Madre


class EpisodioMadre(AuthoredModel):
    """
    Maternal hospital stay. INGRESADO -> ALTA, never back.
    """
    madre = models.ForeignKey(Madre, on_delete=models.PROTECT, related_name="episodios")

    fecha_ingreso = models.DateTimeField(db_index=True)
    motivo_ingreso = models.CharField(max_length=300, blank=True, default="")
    hospital_anterior = models.CharField(max_length=200, blank=True, default="")

    estado = models.CharField(
        max_length=16,
        choices=EpisodeStatus.choices,
        default=EpisodeStatus.INGRESADO,
        db_index=True,
    )
    fecha_alta = models.DateTimeField(null=True, blank=True)
    condicion_egreso = models.CharField(max_length=300, blank=True, default="")

    class Meta:
        db_table = "episodios_episodio_madre"
        ordering = ["-fecha_ingreso"]
        indexes = [
            models.Index(fields=["madre", "estado"]),
        ]

    def __str__(self) -> str:
        return f"{self.madre.rut} {self.estado} {self.fecha_ingreso:%Y-%m-%d}"
