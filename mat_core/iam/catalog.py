# mat_core/iam/catalog.py
"""
Fixed permission catalogue, system roles and their grants.
Loaded by `manage.py ensure_roles`.
"""
from __future__ import annotations

PERMISSIONS: dict[str, str] = {
    "madre:view": "Visualizar madres",
    "madre:create": "Registrar madre",
    "madre:update": "Editar madre",
    "madre:delete": "Eliminar madre",
    "madre:view_limited": "Visualizar madres (solo datos básicos)",
    "madre:create_limited": "Registrar madre (solo datos básicos)",
    "madre:update_limited": "Editar madre (solo datos básicos)",
    "madre:delete_limited": "Eliminar madre (solo si no tiene partos/RN)",
    "parto:view": "Visualizar partos",
    "parto:create": "Registrar parto",
    "parto:update": "Editar parto",
    "parto:delete": "Eliminar parto",
    "recien-nacido:view": "Visualizar recién nacidos",
    "recien-nacido:create": "Registrar recién nacido",
    "recien-nacido:update": "Editar recién nacido",
    "recien-nacido:delete": "Eliminar recién nacido",
    "registro_clinico:edit": "Editar registro clínico",
    "fichas:view": "Visualizar fichas",
    "reporte_rem:generate": "Generar reporte REM",
    "ingreso_alta:manage": "Gestionar ingreso/alta",
    "ingreso_alta:view": "Visualizar ingresos/altas",
    "ingreso_alta:create": "Registrar ingreso",
    "ingreso_alta:update": "Editar ingreso/alta",
    "ingreso_alta:alta": "Procesar alta",
    "informe_alta:generate": "Generar informe para alta",
    "modulo_alta:aprobar": "Aprobar alta médica",
    "auditoria:review": "Revisar auditoría",
    "indicadores:consult": "Consultar indicadores",
    "urni:episodio:create": "Crear episodio URNI",
    "urni:episodio:view": "Ver episodios URNI",
    "urni:episodio:update": "Actualizar episodio URNI",
    "urni:read": "Lectura general URNI",
    "alta:manage": "Gestionar alta URNI",
    "user:create": "Crear usuarios",
    "user:view": "Ver usuarios",
    "user:update": "Editar usuarios",
    "user:delete": "Eliminar usuarios",
    "user:manage": "Gestionar usuarios (activar/desactivar)",
}

ROLES: dict[str, str] = {
    "matrona": "Matrona - Profesional de salud especializado en atención materno-infantil",
    "medico": "Médico - Profesional médico",
    "enfermera": "Enfermera - Profesional de enfermería",
    "administrativo": "Administrativo - Personal administrativo",
    "jefatura": "Jefatura - Personal de jefatura y dirección",
    "administrador_ti": "Administrador TI - Departamento de Tecnologías de la Información",
}

ROLE_PERMISSIONS: dict[str, list[str]] = {
    "matrona": [
        "madre:view",
        "madre:create",
        "madre:update",
        "madre:delete",
        "parto:view",
        "parto:create",
        "parto:update",
        "parto:delete",
        "recien-nacido:view",
        "recien-nacido:create",
        "recien-nacido:update",
        "recien-nacido:delete",
        "registro_clinico:edit",
        "fichas:view",
        "informe_alta:generate",
        "urni:episodio:create",
        "urni:read",
        "ingreso_alta:view",
        "ingreso_alta:create",
        "ingreso_alta:update",
    ],
    "medico": [
        "registro_clinico:edit",
        "fichas:view",
        "modulo_alta:aprobar",
        "urni:read",
        "urni:episodio:update",
        "alta:manage",
        "recien-nacido:view",
    ],
    "enfermera": [
        "fichas:view",
        "urni:read",
    ],
    "administrativo": [
        "reporte_rem:generate",
        "madre:view_limited",
        "madre:create_limited",
        "madre:update_limited",
        "madre:delete_limited",
        "alta:manage",
        "ingreso_alta:alta",
    ],
    "jefatura": [
        "auditoria:review",
        "indicadores:consult",
    ],
    "administrador_ti": [
        "user:create",
        "user:view",
        "user:update",
        "user:delete",
        "user:manage",
    ],
}

# Staff roles selectable as attending professionals of a birth.
STAFF_ROLES = ("matrona", "medico", "enfermera")

DEV_PASSWORD = "Asdf1234!"

DEV_USERS = [
    {"rut": "12345678-5", "nombre": "María González", "email": "matrona@srorn.cl", "role": "matrona"},
    {"rut": "23456789-6", "nombre": "Dr. Carlos Pérez", "email": "medico@srorn.cl", "role": "medico"},
    {"rut": "34567890-2", "nombre": "Ana Martínez", "email": "enfermera@srorn.cl", "role": "enfermera"},
    {"rut": "45678901-9", "nombre": "Roberto Silva", "email": "administrativo@srorn.cl", "role": "administrativo"},
    {"rut": "56789012-5", "nombre": "Dra. Patricia López", "email": "jefatura@srorn.cl", "role": "jefatura"},
    {"rut": "99999999-9", "nombre": "Departamento TI", "email": "ti@srorn.cl", "role": "administrador_ti"},
]
