# mat_core/partos/models.py
from django.conf import settings
from django.db import models

from mat_core.common.models import AuthoredModel
from mat_core.madres.models import Madre


class TipoParto(models.TextChoices):
    VAGINAL = "VAGINAL", "Vaginal"
    INSTRUMENTAL = "INSTRUMENTAL", "Instrumental"
    CESAREA_ELECTIVA = "CESAREA_ELECTIVA", "Cesárea electiva"
    CESAREA_URGENCIA = "CESAREA_URGENCIA", "Cesárea de urgencia"
    PREHOSPITALARIO = "PREHOSPITALARIO", "Prehospitalario"
    FUERA_RED = "FUERA_RED", "Fuera de red"
    DOMICILIO_PROFESIONAL = "DOMICILIO_PROFESIONAL", "Domicilio con profesional"
    DOMICILIO_SIN_PROFESIONAL = "DOMICILIO_SIN_PROFESIONAL", "Domicilio sin profesional"


CESAREAS = {TipoParto.CESAREA_ELECTIVA, TipoParto.CESAREA_URGENCIA}


class LugarParto(models.TextChoices):
    SALA_PARTO = "SALA_PARTO", "Sala de parto"
    PABELLON = "PABELLON", "Pabellón"
    DOMICILIO = "DOMICILIO", "Domicilio"
    OTRO = "OTRO", "Otro"


class CursoParto(models.TextChoices):
    EUTOCICO = "EUTOCICO", "Eutócico"
    DISTOCICO = "DISTOCICO", "Distócico"


class InicioParto(models.TextChoices):
    ESPONTANEO = "ESPONTANEO", "Espontáneo"
    INDUCIDO_MECANICO = "INDUCIDO_MECANICO", "Inducido mecánico"
    INDUCIDO_FARMACOLOGICO = "INDUCIDO_FARMACOLOGICO", "Inducido farmacológico"


class Parto(AuthoredModel):
    madre = models.ForeignKey(Madre, on_delete=models.PROTECT, related_name="partos")

    fecha_hora = models.DateTimeField(db_index=True)
    tipo = models.CharField(max_length=32, choices=TipoParto.choices)
    lugar = models.CharField(max_length=16, choices=LugarParto.choices)
    lugar_detalle = models.CharField(max_length=100, blank=True, default="")  # only for OTRO

    curso = models.CharField(max_length=16, choices=CursoParto.choices, null=True, blank=True)
    inicio = models.CharField(max_length=32, choices=InicioParto.choices, null=True, blank=True)
    edad_gestacional_semanas = models.PositiveSmallIntegerField(null=True, blank=True)

    # good-practice indicators, unknown until recorded
    conduccion_oxitocica = models.BooleanField(null=True, blank=True)
    episiotomia = models.BooleanField(null=True, blank=True)
    acompanante_durante_trabajo = models.BooleanField(null=True, blank=True)
    ligadura_tardia_cordon = models.BooleanField(null=True, blank=True)
    contacto_piel_piel_madre_30min = models.BooleanField(null=True, blank=True)

    complicaciones = models.TextField(blank=True, default="")
    observaciones = models.TextField(blank=True, default="")

    matronas = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="partos_como_matrona", blank=True)
    medicos = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="partos_como_medico", blank=True)
    enfermeras = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="partos_como_enfermera", blank=True)

    class Meta:
        db_table = "partos_parto"
        ordering = ["-fecha_hora"]
        indexes = [
            models.Index(fields=["madre", "fecha_hora"]),
        ]

    def __str__(self) -> str:
        return f"{self.get_tipo_display()} {self.fecha_hora:%Y-%m-%d %H:%M}"

    @property
    def es_cesarea(self) -> bool:
        return self.tipo in CESAREAS
