"""Coerce and validate a single raw custom field value against its definition.

Every field type has one normalizer. A normalizer returns the canonical
value that is stored in a record's ``custom_fields`` map, or raises
:class:`FieldValueError` with a short human-readable reason. Normalizing an
already-normalized value returns it unchanged.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import date, datetime, time, timezone
from typing import Any, Protocol

from ..enums import FieldType


class FieldValueError(ValueError):
    """Raised when a raw value cannot be normalized for its field."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class FieldSpec(Protocol):
    field_type: str
    options: list[dict[str, Any]] | None
    validation: dict[str, Any] | None


def normalize_value(definition: FieldSpec, raw: Any) -> Any:
    """Return the canonical form of ``raw`` for ``definition``.

    ``None`` and the empty string always clear the field, whatever its type.
    """
    if raw is None or raw == "":
        return None

    try:
        field_type = FieldType(definition.field_type)
    except ValueError:
        raise FieldValueError("unsupported field type") from None

    return _NORMALIZERS[field_type](definition, raw)


# -- helpers -----------------------------------------------------------------

def _rules(definition: FieldSpec) -> dict[str, Any]:
    return definition.validation or {}


def _option_values(definition: FieldSpec) -> list[str]:
    return [str(opt.get("value")) for opt in (definition.options or [])]


def _fmt(number: float | int) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def _stringify(item: Any) -> str:
    if item is None:
        return "null"
    if not isinstance(item, (str, int, float)):
        raise FieldValueError("items must be strings, numbers or booleans")
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, float):
        return _fmt(item)
    return str(item)


def _check_pattern(definition: FieldSpec, value: str) -> None:
    pattern = _rules(definition).get("pattern")
    if not pattern:
        return
    try:
        matched = re.search(pattern, value)
    except re.error:
        raise FieldValueError("has an invalid validation pattern") from None
    if not matched:
        raise FieldValueError("does not match the required pattern")


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_datetime(raw: Any) -> datetime:
    if isinstance(raw, bool):
        raise FieldValueError("invalid date")
    if isinstance(raw, datetime):
        return _to_utc(raw)
    if isinstance(raw, date):
        return datetime.combine(raw, time(), tzinfo=timezone.utc)
    if isinstance(raw, (int, float)):
        # Numeric input is epoch milliseconds.
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise FieldValueError("invalid date") from None
    if isinstance(raw, str):
        try:
            return _to_utc(datetime.fromisoformat(raw.strip()))
        except ValueError:
            raise FieldValueError("invalid date") from None
    raise FieldValueError("invalid date")


# -- one normalizer per field type -------------------------------------------

def _normalize_text(definition: FieldSpec, raw: Any) -> str:
    if not isinstance(raw, str):
        raise FieldValueError("must be a string")
    rules = _rules(definition)
    min_len = rules.get("min")
    max_len = rules.get("max")
    if min_len is not None and len(raw) < min_len:
        raise FieldValueError(f"must be at least {_fmt(min_len)} characters")
    if max_len is not None and len(raw) > max_len:
        raise FieldValueError(f"must be at most {_fmt(max_len)} characters")
    _check_pattern(definition, raw)
    return raw


def _normalize_number(definition: FieldSpec, raw: Any) -> int | float:
    if isinstance(raw, bool):
        raise FieldValueError("must be a number")
    if isinstance(raw, (int, float)):
        number: int | float = raw
    elif isinstance(raw, str) and "_" not in raw:
        try:
            number = float(raw.strip())
        except ValueError:
            raise FieldValueError("must be a number") from None
    else:
        raise FieldValueError("must be a number")

    if isinstance(number, float):
        if not math.isfinite(number):
            raise FieldValueError("must be a number")
        if number.is_integer():
            number = int(number)

    rules = _rules(definition)
    minimum = rules.get("min")
    maximum = rules.get("max")
    if minimum is not None and number < minimum:
        raise FieldValueError(f"must be >= {_fmt(minimum)}")
    if maximum is not None and number > maximum:
        raise FieldValueError(f"must be <= {_fmt(maximum)}")
    _check_pattern(definition, _fmt(number))
    return number


def _normalize_boolean(definition: FieldSpec, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise FieldValueError("must be true or false")


def _normalize_datetime(definition: FieldSpec, raw: Any) -> str:
    value = _parse_datetime(raw)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _normalize_select(definition: FieldSpec, raw: Any) -> str:
    if not isinstance(raw, str):
        raise FieldValueError("must be a string")
    allowed = _option_values(definition)
    if allowed and raw not in allowed:
        raise FieldValueError(f"must be one of: {', '.join(allowed)}")
    return raw


def _normalize_multiselect(definition: FieldSpec, raw: Any) -> list[str]:
    items = raw if isinstance(raw, (list, tuple)) else [raw]
    values = [_stringify(item) for item in items]
    allowed = _option_values(definition)
    if allowed and any(value not in allowed for value in values):
        raise FieldValueError(f"contains invalid value. Allowed: {', '.join(allowed)}")
    return values


_NORMALIZERS: dict[FieldType, Callable[[FieldSpec, Any], Any]] = {
    FieldType.TEXT: _normalize_text,
    FieldType.TEXTAREA: _normalize_text,
    FieldType.NUMBER: _normalize_number,
    FieldType.CURRENCY: _normalize_number,
    FieldType.BOOLEAN: _normalize_boolean,
    FieldType.DATE: _normalize_datetime,
    FieldType.DATETIME: _normalize_datetime,
    FieldType.SELECT: _normalize_select,
    FieldType.MULTISELECT: _normalize_multiselect,
}
