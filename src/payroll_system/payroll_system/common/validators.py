from __future__ import annotations

from datetime import date, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date
from .money import to_decimal

E = TypeVar("E", bound=Enum)


def require_field(data: Mapping[str, Any], field_name: str) -> Any:
    if field_name not in data or data[field_name] is None:
        raise ValidationError(f"{field_name} is required")
    return data[field_name]


def require_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationError(f"{field_name} must be an object")
    return value


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from exc


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value in (None, ""):
        return None
    return require_date(value, field_name)


def optional_time(value: Any, field_name: str) -> Optional[time]:
    if value in (None, ""):
        return None
    if isinstance(value, time):
        return value
    try:
        return parse_hhmm(str(value))
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be a HH:MM time") from exc


def require_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        d = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if not d.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return d


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an integer") from exc


def require_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from exc
