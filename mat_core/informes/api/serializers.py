# mat_core/informes/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.episodios.api.serializers import PartoWithNewbornsSerializer
from mat_core.episodios.models import EpisodioMadre
from mat_core.informes.models import InformeAlta
from mat_core.informes.selectors import partos_candidatos
from mat_core.madres.api.serializers import MadreRefSerializer
from mat_core.madres.models import Madre
from mat_core.partos.api.serializers import StaffRefSerializer
from mat_core.recien_nacidos.models import RecienNacido


class GenerarInformeSerializer(serializers.Serializer):
    episodioId = serializers.UUIDField(required=False)
    partoId = serializers.UUIDField(required=False)
    formato = serializers.CharField(max_length=8, required=False)


class AprobarAltaSerializer(serializers.Serializer):
    condicionEgreso = serializers.CharField(source="condicion_egreso", required=False, allow_blank=True)


class InformeAltaSerializer(serializers.ModelSerializer):
    episodioId = serializers.UUIDField(source="episodio_id", read_only=True)
    partoId = serializers.UUIDField(source="parto_id", read_only=True)
    madre = MadreRefSerializer(source="episodio.madre", read_only=True)
    generadoPor = StaffRefSerializer(source="generado_por", read_only=True)
    fechaGeneracion = serializers.DateTimeField(source="fecha_generacion", read_only=True)

    class Meta:
        model = InformeAlta
        fields = ["id", "episodioId", "partoId", "madre", "formato", "generadoPor", "fechaGeneracion", "contenido"]
        read_only_fields = fields


class _MadreInformeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Madre
        fields = ["id", "rut", "nombres", "apellidos", "edad", "telefono", "direccion"]
        read_only_fields = fields


class _EpisodioInformeSerializer(serializers.ModelSerializer):
    fechaIngreso = serializers.DateTimeField(source="fecha_ingreso", read_only=True)
    motivoIngreso = serializers.CharField(source="motivo_ingreso", read_only=True)
    fechaAlta = serializers.DateTimeField(source="fecha_alta", read_only=True)
    condicionEgreso = serializers.CharField(source="condicion_egreso", read_only=True)

    class Meta:
        model = EpisodioMadre
        fields = ["id", "fechaIngreso", "estado", "motivoIngreso", "fechaAlta", "condicionEgreso"]
        read_only_fields = fields


class _RecienNacidoInformeSerializer(serializers.ModelSerializer):
    pesoNacimientoGramos = serializers.IntegerField(source="peso_nacimiento_gramos", read_only=True)
    tallaCm = serializers.IntegerField(source="talla_cm", read_only=True)
    apgar1Min = serializers.IntegerField(source="apgar_1_min", read_only=True)
    apgar5Min = serializers.IntegerField(source="apgar_5_min", read_only=True)

    class Meta:
        model = RecienNacido
        fields = ["sexo", "pesoNacimientoGramos", "tallaCm", "apgar1Min", "apgar5Min", "observaciones"]
        read_only_fields = fields


class InformeAltaDetailSerializer(serializers.ModelSerializer):
    """
    Report as shown for review: current clinical data around the frozen header.
    """
    fechaGeneracion = serializers.DateTimeField(source="fecha_generacion", read_only=True)
    generadoPor = serializers.SerializerMethodField()
    parto = serializers.SerializerMethodField()
    recienNacidos = _RecienNacidoInformeSerializer(source="parto.recien_nacidos", many=True, read_only=True)
    episodio = _EpisodioInformeSerializer(read_only=True)
    madre = _MadreInformeSerializer(source="episodio.madre", read_only=True)

    class Meta:
        model = InformeAlta
        fields = ["id", "fechaGeneracion", "generadoPor", "formato", "parto", "recienNacidos", "episodio", "madre"]
        read_only_fields = fields

    def get_generadoPor(self, obj: InformeAlta) -> str:
        user = obj.generado_por
        if user is None:
            return "Desconocido"
        profile = getattr(user, "profile", None)
        return (profile.nombre if profile else "") or user.email or "Desconocido"

    def get_parto(self, obj: InformeAlta) -> dict:
        parto = obj.parto
        return {
            "fechaHora": serializers.DateTimeField().to_representation(parto.fecha_hora),
            "tipo": parto.tipo,
            "lugar": parto.lugar,
            "lugarDetalle": parto.lugar_detalle,
            "observaciones": parto.observaciones or parto.complicaciones,
        }


class EpisodioPendienteSerializer(serializers.ModelSerializer):
    madre = MadreRefSerializer(read_only=True)
    fechaIngreso = serializers.DateTimeField(source="fecha_ingreso", read_only=True)
    motivoIngreso = serializers.CharField(source="motivo_ingreso", read_only=True)
    partos = serializers.SerializerMethodField()

    class Meta:
        model = EpisodioMadre
        fields = ["id", "madre", "fechaIngreso", "motivoIngreso", "estado", "partos"]
        read_only_fields = fields

    def get_partos(self, obj: EpisodioMadre) -> list:
        return PartoWithNewbornsSerializer(partos_candidatos(obj), many=True).data


class EpisodioConInformeSerializer(serializers.ModelSerializer):
    madre = MadreRefSerializer(read_only=True)
    fechaIngreso = serializers.DateTimeField(source="fecha_ingreso", read_only=True)
    informeGenerado = serializers.SerializerMethodField()
    informeFecha = serializers.DateTimeField(source="informe_alta.fecha_generacion", read_only=True)

    class Meta:
        model = EpisodioMadre
        fields = ["id", "fechaIngreso", "estado", "madre", "informeGenerado", "informeFecha"]
        read_only_fields = fields

    def get_informeGenerado(self, obj: EpisodioMadre) -> bool:
        return hasattr(obj, "informe_alta")
