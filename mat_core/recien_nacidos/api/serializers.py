# mat_core/recien_nacidos/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.madres.api.serializers import MadreRefSerializer
from mat_core.recien_nacidos.models import RecienNacido


class RecienNacidoInputSerializer(serializers.Serializer):
    partoId = serializers.UUIDField(source="parto_id", required=False)
    sexo = serializers.CharField(max_length=1, required=False)
    pesoNacimientoGramos = serializers.IntegerField(
        source="peso_nacimiento_gramos", min_value=0, required=False, allow_null=True
    )
    tallaCm = serializers.IntegerField(source="talla_cm", min_value=0, required=False, allow_null=True)
    apgar1Min = serializers.IntegerField(source="apgar_1_min", required=False, allow_null=True)
    apgar5Min = serializers.IntegerField(source="apgar_5_min", required=False, allow_null=True)
    esNacidoVivo = serializers.BooleanField(source="es_nacido_vivo", required=False, allow_null=True)
    observaciones = serializers.CharField(required=False, allow_blank=True)


class PartoRefSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    fechaHora = serializers.DateTimeField(source="fecha_hora", read_only=True)
    tipo = serializers.CharField(read_only=True)
    madre = MadreRefSerializer(read_only=True)


class RecienNacidoSerializer(serializers.ModelSerializer):
    parto = PartoRefSerializer(read_only=True)
    pesoNacimientoGramos = serializers.IntegerField(source="peso_nacimiento_gramos", read_only=True)
    tallaCm = serializers.IntegerField(source="talla_cm", read_only=True)
    apgar1Min = serializers.IntegerField(source="apgar_1_min", read_only=True)
    apgar5Min = serializers.IntegerField(source="apgar_5_min", read_only=True)
    esNacidoVivo = serializers.BooleanField(source="es_nacido_vivo", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = RecienNacido
        fields = [
            "id",
            "parto",
            "sexo",
            "pesoNacimientoGramos",
            "tallaCm",
            "apgar1Min",
            "apgar5Min",
            "esNacidoVivo",
            "observaciones",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class RecienNacidoRefSerializer(serializers.ModelSerializer):
    pesoNacimientoGramos = serializers.IntegerField(source="peso_nacimiento_gramos", read_only=True)
    madre = MadreRefSerializer(source="parto.madre", read_only=True)

    class Meta:
        model = RecienNacido
        fields = ["id", "sexo", "pesoNacimientoGramos", "madre"]
        read_only_fields = fields
