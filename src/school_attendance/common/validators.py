from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], message: str, *, field: Optional[str] = None) -> str:
    if not value or not str(value).strip():
        raise ValidationError(message, field=field)
    return str(value).strip()


def require_positive_int(value: Any, message: str, *, field: Optional[str] = None) -> int:
    """Accept ints or numeric strings ("3", " 2 ") greater than zero."""

    if isinstance(value, bool):
        raise ValidationError(message, field=field)
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(message, field=field)
    if number < 1:
        raise ValidationError(message, field=field)
    return number
