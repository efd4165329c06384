# mat_core/informes/models.py
import uuid

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from mat_core.episodios.models import EpisodioMadre
from mat_core.partos.models import Parto


class FormatoInforme(models.TextChoices):
    PDF = "PDF", "PDF"
    DOCX = "DOCX", "DOCX"
    HTML = "HTML", "HTML"


class InformeAlta(models.Model):
    """
    Discharge report of a maternal episode. One per episode; contenido
    freezes the clinical data as it was when the report was generated.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    episodio = models.OneToOneField(EpisodioMadre, on_delete=models.PROTECT, related_name="informe_alta")
    parto = models.ForeignKey(Parto, on_delete=models.PROTECT, related_name="informes")

    formato = models.CharField(max_length=8, choices=FormatoInforme.choices)
    generado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="informes_generados",
        null=True,
        blank=True,
    )
    fecha_generacion = models.DateTimeField(auto_now_add=True, db_index=True)
    contenido = models.JSONField(encoder=DjangoJSONEncoder, default=dict)

    class Meta:
        db_table = "informes_informe_alta"
        ordering = ["-fecha_generacion"]

    def __str__(self) -> str:
        return f"Informe {self.formato} {self.fecha_generacion:%Y-%m-%d}"
