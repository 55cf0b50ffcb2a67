"""Validate and merge a record's custom field payload against its definitions."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.custom_field import CustomFieldDefinition
from . import custom_field_svc
from .field_normalizer import FieldValueError, normalize_value

logger = logging.getLogger(__name__)


@dataclass
class CustomFieldValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)
    definitions: list[CustomFieldDefinition] = field(default_factory=list)


def merge_custom_fields(
    definitions: Sequence[CustomFieldDefinition],
    provided: Mapping[str, Any] | None,
    *,
    object_type: str,
    enforce_required: bool = False,
    existing_values: Mapping[str, Any] | None = None,
) -> CustomFieldValidation:
    """Merge ``provided`` over ``existing_values`` using active ``definitions``.

    Keys without a definition are rejected, not dropped. The returned
    ``values`` map is the complete payload to store; callers must discard the
    write when ``valid`` is false.
    """
    by_key = {d.field_key: d for d in definitions}
    payload: dict[str, Any] = dict(existing_values or {})
    errors: list[str] = []
    failed: set[str] = set()

    for key, raw in (provided or {}).items():
        defn = by_key.get(key)
        if defn is None:
            errors.append(f'Unknown custom field "{key}" for {object_type}')
            continue
        try:
            payload[key] = normalize_value(defn, raw)
        except FieldValueError as exc:
            errors.append(f"Invalid value for {defn.field_label}: {exc.reason}")
            failed.add(key)

    for defn in definitions:
        key = defn.field_key
        if key in failed or payload.get(key) is not None:
            continue

        if enforce_required and defn.required:
            if defn.default_value is None:
                errors.append(f'Custom field "{defn.field_label}" is required')
                continue
            try:
                payload[key] = normalize_value(defn, defn.default_value)
            except FieldValueError as exc:
                errors.append(f"Default value invalid for {defn.field_label}: {exc.reason}")
        elif key not in payload and defn.default_value is not None:
            try:
                payload[key] = normalize_value(defn, defn.default_value)
            except FieldValueError as exc:
                logger.warning(
                    "Ignoring invalid default for custom field %s.%s: %s",
                    object_type, key, exc.reason,
                )

    return CustomFieldValidation(
        valid=not errors,
        errors=errors,
        values=payload,
        definitions=list(definitions),
    )


async def validate_custom_fields(
    db: AsyncSession,
    tenant_id: str,
    object_type: str,
    provided: Mapping[str, Any] | None,
    *,
    enforce_required: bool = False,
    existing_values: Mapping[str, Any] | None = None,
) -> CustomFieldValidation:
    """Validate a custom field payload for one record of ``object_type``.

    ``enforce_required`` is set on create only, so records created before a
    field became required stay editable.
    """
    definitions = await custom_field_svc.list_definitions(db, tenant_id, object_type)
    result = merge_custom_fields(
        definitions,
        provided,
        object_type=object_type,
        enforce_required=enforce_required,
        existing_values=existing_values,
    )
    if not result.valid:
        logger.info(
            "Rejected %s custom fields for tenant %s: %s",
            object_type, tenant_id, "; ".join(result.errors),
        )
    return result
