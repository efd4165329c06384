# mat_core/iam/validators.py
from __future__ import annotations

import re

from django.core.exceptions import ValidationError

SYMBOLS_RE = re.compile(r"[!@#$%^&*()_+\-=\[\]{}|;:,.<>?]")


class ComplexityValidator:
    """
    AUTH_PASSWORD_VALIDATORS entry: at least one upper, one lower, one digit, one symbol.
    Length is left to MinimumLengthValidator.
    """

    rules = (
        (re.compile(r"[A-Z]"), "La contraseña debe contener al menos una mayúscula", "password_no_upper"),
        (re.compile(r"[a-z]"), "La contraseña debe contener al menos una minúscula", "password_no_lower"),
        (re.compile(r"[0-9]"), "La contraseña debe contener al menos un número", "password_no_digit"),
        (SYMBOLS_RE, "La contraseña debe contener al menos un símbolo especial", "password_no_symbol"),
    )

    def validate(self, password, user=None):
        for pattern, message, code in self.rules:
            if not pattern.search(password or ""):
                raise ValidationError(message, code=code)

    def get_help_text(self):
        return "La contraseña debe contener mayúsculas, minúsculas, números y símbolos."
