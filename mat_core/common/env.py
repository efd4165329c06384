# mat_core/common/env.py
from django.conf import settings

DEVELOPMENT = "development"


def dev_mode_enabled() -> bool:
    """
    Open only when ENVIRONMENT or NODE_ENV is the literal "development".
    """
    return DEVELOPMENT in (getattr(settings, "ENVIRONMENT", ""), getattr(settings, "NODE_ENV", ""))
