# mat_core/partos/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.madres.api.serializers import MadreRefSerializer
from mat_core.partos.models import Parto

STAFF_KEYS = ("matronasIds", "medicosIds", "enfermerasIds")


class PartoInputSerializer(serializers.Serializer):
    madreId = serializers.UUIDField(source="madre_id", required=False)
    fechaHora = serializers.DateTimeField(source="fecha_hora", required=False)
    tipo = serializers.CharField(max_length=32, required=False)
    lugar = serializers.CharField(max_length=16, required=False)
    lugarDetalle = serializers.CharField(source="lugar_detalle", max_length=100, required=False, allow_blank=True)
    curso = serializers.CharField(max_length=16, required=False, allow_null=True)
    inicio = serializers.CharField(max_length=32, required=False, allow_null=True)
    edadGestacionalSemanas = serializers.IntegerField(
        source="edad_gestacional_semanas", min_value=20, max_value=45, required=False, allow_null=True
    )
    conduccionOxitocica = serializers.BooleanField(source="conduccion_oxitocica", required=False, allow_null=True)
    episiotomia = serializers.BooleanField(required=False, allow_null=True)
    acompananteDuranteTrabajo = serializers.BooleanField(
        source="acompanante_durante_trabajo", required=False, allow_null=True
    )
    ligaduraTardiaCordon = serializers.BooleanField(source="ligadura_tardia_cordon", required=False, allow_null=True)
    contactoPielPielMadre30min = serializers.BooleanField(
        source="contacto_piel_piel_madre_30min", required=False, allow_null=True
    )
    complicaciones = serializers.CharField(required=False, allow_blank=True, max_length=1000)
    observaciones = serializers.CharField(required=False, allow_blank=True, max_length=1000)

    matronasIds = serializers.ListField(child=serializers.IntegerField(), required=False)
    medicosIds = serializers.ListField(child=serializers.IntegerField(), required=False)
    enfermerasIds = serializers.ListField(child=serializers.IntegerField(), required=False)


class StaffRefSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    nombre = serializers.CharField(source="profile.nombre", read_only=True)
    email = serializers.CharField(read_only=True)


class PartoSerializer(serializers.ModelSerializer):
    madre = MadreRefSerializer(read_only=True)
    fechaHora = serializers.DateTimeField(source="fecha_hora", read_only=True)
    lugarDetalle = serializers.CharField(source="lugar_detalle", read_only=True)
    edadGestacionalSemanas = serializers.IntegerField(source="edad_gestacional_semanas", read_only=True)
    conduccionOxitocica = serializers.BooleanField(source="conduccion_oxitocica", read_only=True)
    acompananteDuranteTrabajo = serializers.BooleanField(source="acompanante_durante_trabajo", read_only=True)
    ligaduraTardiaCordon = serializers.BooleanField(source="ligadura_tardia_cordon", read_only=True)
    contactoPielPielMadre30min = serializers.BooleanField(source="contacto_piel_piel_madre_30min", read_only=True)
    matronas = StaffRefSerializer(many=True, read_only=True)
    medicos = StaffRefSerializer(many=True, read_only=True)
    enfermeras = StaffRefSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Parto
        fields = [
            "id",
            "madre",
            "fechaHora",
            "tipo",
            "lugar",
            "lugarDetalle",
            "curso",
            "inicio",
            "edadGestacionalSemanas",
            "conduccionOxitocica",
            "episiotomia",
            "acompananteDuranteTrabajo",
            "ligaduraTardiaCordon",
            "contactoPielPielMadre30min",
            "complicaciones",
            "observaciones",
            "matronas",
            "medicos",
            "enfermeras",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class PartoSummarySerializer(serializers.ModelSerializer):
    fechaHora = serializers.DateTimeField(source="fecha_hora", read_only=True)

    class Meta:
        model = Parto
        fields = ["id", "fechaHora", "tipo", "lugar"]
        read_only_fields = fields
