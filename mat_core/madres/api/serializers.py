# mat_core/madres/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from mat_core.madres.models import Madre

# camelCase on the wire -> model attribute
INPUT_FIELD_MAP = {
    "rut": "rut",
    "nombres": "nombres",
    "apellidos": "apellidos",
    "edad": "edad",
    "fechaNacimiento": "fecha_nacimiento",
    "direccion": "direccion",
    "telefono": "telefono",
    "fichaClinica": "ficha_clinica",
}


class MadreInputSerializer(serializers.Serializer):
    rut = serializers.CharField(max_length=12, required=False)
    nombres = serializers.CharField(max_length=120, required=False)
    apellidos = serializers.CharField(max_length=120, required=False)
    edad = serializers.IntegerField(min_value=0, max_value=120, required=False, allow_null=True)
    fechaNacimiento = serializers.DateField(source="fecha_nacimiento", required=False, allow_null=True)
    direccion = serializers.CharField(max_length=255, required=False, allow_blank=True)
    telefono = serializers.CharField(max_length=32, required=False, allow_blank=True)
    fichaClinica = serializers.CharField(source="ficha_clinica", max_length=64, required=False, allow_blank=True, allow_null=True)


class MadreSerializer(serializers.ModelSerializer):
    fechaNacimiento = serializers.DateField(source="fecha_nacimiento", read_only=True)
    fichaClinica = serializers.CharField(source="ficha_clinica", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Madre
        fields = [
            "id",
            "rut",
            "nombres",
            "apellidos",
            "edad",
            "fechaNacimiento",
            "direccion",
            "telefono",
            "fichaClinica",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class MadreRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Madre
        fields = ["id", "rut", "nombres", "apellidos"]
        read_only_fields = fields
