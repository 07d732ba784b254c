from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_negative_int(value: Any, field_name: str) -> int:
    if value is None or value == "":
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} phải là số nguyên") from None
    if number < 0:
        raise ValidationError(f"{field_name} không được âm")
    return number
