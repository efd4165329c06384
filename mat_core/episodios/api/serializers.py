# mat_core/episodios/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.episodios.models import EpisodioMadre
from mat_core.madres.api.serializers import MadreRefSerializer
from mat_core.partos.models import Parto
from mat_core.partos.api.serializers import StaffRefSerializer


class EpisodioMadreInputSerializer(serializers.Serializer):
    madreId = serializers.UUIDField(source="madre_id", required=False)
    fechaIngreso = serializers.DateTimeField(source="fecha_ingreso", required=False, allow_null=True)
    motivoIngreso = serializers.CharField(source="motivo_ingreso", required=False, allow_blank=True)
    hospitalAnterior = serializers.CharField(source="hospital_anterior", required=False, allow_blank=True)


class AltaInputSerializer(serializers.Serializer):
    condicionEgreso = serializers.CharField(source="condicion_egreso", required=False, allow_blank=True)


class EpisodioMadreSerializer(serializers.ModelSerializer):
    madre = MadreRefSerializer(read_only=True)
    fechaIngreso = serializers.DateTimeField(source="fecha_ingreso", read_only=True)
    motivoIngreso = serializers.CharField(source="motivo_ingreso", read_only=True)
    hospitalAnterior = serializers.CharField(source="hospital_anterior", read_only=True)
    fechaAlta = serializers.DateTimeField(source="fecha_alta", read_only=True)
    condicionEgreso = serializers.CharField(source="condicion_egreso", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = EpisodioMadre
        fields = [
            "id",
            "madre",
            "fechaIngreso",
            "motivoIngreso",
            "hospitalAnterior",
            "estado",
            "fechaAlta",
            "condicionEgreso",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class _RecienNacidoBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    sexo = serializers.CharField(read_only=True)
    pesoNacimientoGramos = serializers.IntegerField(source="peso_nacimiento_gramos", read_only=True)


class PartoWithNewbornsSerializer(serializers.ModelSerializer):
    fechaHora = serializers.DateTimeField(source="fecha_hora", read_only=True)
    recienNacidos = _RecienNacidoBriefSerializer(source="recien_nacidos", many=True, read_only=True)

    class Meta:
        model = Parto
        fields = ["id", "fechaHora", "tipo", "lugar", "recienNacidos"]
        read_only_fields = fields


class EpisodioMadreDetailSerializer(EpisodioMadreSerializer):
    createdBy = StaffRefSerializer(source="created_by", read_only=True)
    updatedBy = StaffRefSerializer(source="updated_by", read_only=True)

    class Meta(EpisodioMadreSerializer.Meta):
        fields = EpisodioMadreSerializer.Meta.fields + ["createdBy", "updatedBy"]
        read_only_fields = fields
