# mat_core/urni/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.partos.api.serializers import StaffRefSerializer
from mat_core.recien_nacidos.api.serializers import RecienNacidoRefSerializer
from mat_core.urni.models import EpisodioURNI


class EpisodioURNIInputSerializer(serializers.Serializer):
    rnId = serializers.UUIDField(source="recien_nacido_id", required=False)
    fechaHoraIngreso = serializers.DateTimeField(source="fecha_hora_ingreso", required=False, allow_null=True)
    motivoIngreso = serializers.CharField(source="motivo_ingreso", required=False, allow_blank=True)
    servicioUnidad = serializers.CharField(source="servicio_unidad", required=False, allow_blank=True, allow_null=True)
    responsableClinicoId = serializers.IntegerField(source="responsable_clinico_id", required=False, allow_null=True)


class AltaURNIInputSerializer(serializers.Serializer):
    fechaHoraAlta = serializers.DateTimeField(source="fecha_hora_alta", required=False, allow_null=True)
    condicionEgreso = serializers.CharField(source="condicion_egreso", required=False, allow_blank=True)


class EpisodioURNISerializer(serializers.ModelSerializer):
    recienNacido = RecienNacidoRefSerializer(source="recien_nacido", read_only=True)
    fechaHoraIngreso = serializers.DateTimeField(source="fecha_hora_ingreso", read_only=True)
    motivoIngreso = serializers.CharField(source="motivo_ingreso", read_only=True)
    servicioUnidad = serializers.CharField(source="servicio_unidad", read_only=True)
    responsableClinico = StaffRefSerializer(source="responsable_clinico", read_only=True)
    fechaHoraAlta = serializers.DateTimeField(source="fecha_hora_alta", read_only=True)
    condicionEgreso = serializers.CharField(source="condicion_egreso", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = EpisodioURNI
        fields = [
            "id",
            "recienNacido",
            "fechaHoraIngreso",
            "motivoIngreso",
            "servicioUnidad",
            "responsableClinico",
            "estado",
            "fechaHoraAlta",
            "condicionEgreso",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
