# mat_core/common/rut.py
"""
Chilean RUT helpers. Accepted format: digits, hyphen, check digit, no dots (12345678-5).
"""
from __future__ import annotations

import re

RUT_RE = re.compile(r"^(\d{7,8})-([\dkK])$")

RUT_FORMAT_MSG = "RUT inválido. Formato esperado: 12345678-9 (sin puntos, con guion)"


def check_digit(number: str) -> str:
    total = 0
    factor = 2
    for digit in reversed(number):
        total += int(digit) * factor
        factor = 2 if factor == 7 else factor + 1

    dv = 11 - (total % 11)
    if dv == 11:
        return "0"
    if dv == 10:
        return "K"
    return str(dv)


def is_valid_rut(value) -> bool:
    if not value or not isinstance(value, str):
        return False
    match = RUT_RE.match(value.strip())
    if not match:
        return False
    number, dv = match.groups()
    return dv.upper() == check_digit(number)


def normalize_rut(value: str) -> str:
    return value.strip().upper()
