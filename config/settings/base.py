# config/settings/base.py
from pathlib import Path
import os
from dotenv import load_dotenv
from datetime import timedelta


BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "unsafe-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = ["*"]

# Only the literal "development" in either variable enables dev-only endpoints.
ENVIRONMENT = os.getenv("ENVIRONMENT", "production").strip().lower()
NODE_ENV = os.getenv("NODE_ENV", "").strip().lower()
IS_DEVELOPMENT = "development" in (ENVIRONMENT, NODE_ENV)

INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "drf_spectacular",
    "django_filters",

    # Domain apps (modular monolith)
    "mat_core.common.apps.CommonConfig",
    "mat_core.iam.apps.IamConfig",
    "mat_core.audit.apps.AuditConfig",
    "mat_core.madres.apps.MadresConfig",
    "mat_core.partos.apps.PartosConfig",
    "mat_core.recien_nacidos.apps.RecienNacidosConfig",
    "mat_core.urni.apps.UrniConfig",
    "mat_core.episodios.apps.EpisodiosConfig",
    "mat_core.informes.apps.InformesConfig",
    "mat_core.dashboard.apps.DashboardConfig",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",

    # request id on every response + JSON 500 for /api/*
    "mat_core.common.middleware.RequestIdMiddleware",

    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]


ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "maternidad"),
        "USER": os.getenv("DB_USER", "maternidad"),
        "PASSWORD": os.getenv("DB_PASSWORD", "maternidad"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 8}},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "mat_core.iam.validators.ComplexityValidator"},
]

LANGUAGE_CODE = "es-cl"
TIME_ZONE = "America/Santiago"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "mat_core.iam.auth.SessionCookieAuthentication",
    ),
    # Authorization is decided per route by the auth gate.
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.AllowAny",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "mat_core.common.api.exceptions.api_exception_handler",
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
    ],
    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Maternidad API",
    "DESCRIPTION": "Mothers, births, newborns, URNI episodes, discharge reports and audit log",
    "VERSION": "0.1.0",
    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATIONS": True,
    "SECURITY": [
        {"SessionCookie": []}
    ],
}

SIMPLE_JWT = {
    # the "user" cookie lives 24h and is not refreshed
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=24),
    "REFRESH_TOKEN_LIFETIME": timedelta(hours=24),
    "UPDATE_LAST_LOGIN": False,

    # Cookie settings
    "AUTH_COOKIE": "user",
    "AUTH_COOKIE_SECURE": False,   # True in production (HTTPS)
    "AUTH_COOKIE_HTTP_ONLY": True,
    "AUTH_COOKIE_SAMESITE": "Lax",
}

# Pagination: {data, page, limit, total}
PAGINATION_DEFAULT_LIMIT = 20
PAGINATION_MAX_LIMIT = 100
AUDIT_DEFAULT_LIMIT = 50

# CORS settings
CORS_ALLOW_ALL_ORIGINS = True  # Only for development!
CORS_ALLOW_CREDENTIALS = True

LOGIN_URL = "/"


# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------
DB_LOG_LEVELS = {"query": "DEBUG", "info": "INFO", "warn": "WARNING", "error": "ERROR"}


def db_log_level(raw: str | None, *, development: bool) -> str:
    """
    PRISMA_LOG (or DB_LOG) is a comma list (query,info,warn,error). The most verbose entry wins.

    Django only emits SQL statements (the "query" level) while settings.DEBUG is True.
    """
    default = "query,error,warn" if development else "error"
    selected = [p.strip().lower() for p in (raw or default).split(",") if p.strip()]
    levels = [DB_LOG_LEVELS[p] for p in selected if p in DB_LOG_LEVELS]
    if not levels:
        return "ERROR"
    order = ["DEBUG", "INFO", "WARNING", "ERROR"]
    return min(levels, key=order.index)


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "django.db.backends": {
            "handlers": ["console"],
            "level": db_log_level(os.getenv("PRISMA_LOG") or os.getenv("DB_LOG"), development=IS_DEVELOPMENT),
            "propagate": False,
        },
        "mat_core": {
            "handlers": ["console"],
            "level": "DEBUG" if IS_DEVELOPMENT else "INFO",
            "propagate": False,
        },
    },
}
