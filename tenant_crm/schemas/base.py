"""Shared pydantic base classes and error formatting."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase (wire) or snake_case (Python) keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


def format_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic error into one "field: message; ..." line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
