"""Request parsing and response shaping shared by the JSON routers."""

from __future__ import annotations

import uuid
from typing import Any, TypeVar

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect as sa_inspect

from ..schemas.base import format_validation_error

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_id(raw: str, detail: str) -> uuid.UUID:
    """Parse a path id; malformed ids look exactly like missing ones."""
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise HTTPException(status_code=404, detail=detail) from None


async def read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return body


def validate_or_400(schema: type[SchemaT], data: Any) -> SchemaT:
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=format_validation_error(exc)) from None


def serialize_model(obj: Any) -> dict[str, Any]:
    """Every mapped column of ``obj`` keyed in camelCase, JSON-ready."""
    mapper = sa_inspect(obj).mapper
    return jsonable_encoder(
        {to_camel(attr.key): getattr(obj, attr.key) for attr in mapper.column_attrs}
    )
