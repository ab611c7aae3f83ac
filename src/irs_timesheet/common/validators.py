from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def normalize_email(value: str) -> str:
    email = (value or "").strip().lower()
    if not email or "@" not in email or not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email address")
    return email


def optional_time(value: Optional[str], field_name: str) -> Optional[str]:
    """Accept HH:MM (or H:MM), return zero-padded HH:MM or None when blank."""
    v = (value or "").strip()
    if not v:
        return None
    m = _TIME_RE.match(v)
    if not m:
        raise ValidationError(f"{field_name} must be HH:MM")
    return f"{int(m.group(1)):02d}:{m.group(2)}"
