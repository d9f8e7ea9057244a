from __future__ import annotations

import re

from ..core.constants import DAY_KEY_PATTERN
from ..core.exceptions import ValidationError
from .datetime_utils import month_key_of, parse_month_key

_DAY_KEY_RE = re.compile(DAY_KEY_PATTERN)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return value.strip()


def require_month_key(value: str) -> str:
    return month_key_of(parse_month_key(value))


def is_day_key(value: object) -> bool:
    return isinstance(value, str) and bool(_DAY_KEY_RE.fullmatch(value)) and 1 <= int(value) <= 31


def require_day_key(value: str) -> str:
    if not is_day_key(value):
        raise ValidationError(f"Kunci tanggal tidak valid: {value!r}")
    return value


def require_bool(value: object, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} harus bernilai true/false")
    return value
