"""Custom field definition store - per tenant, per object type."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from ..errors import ConflictError
from ..models.custom_field import CustomFieldDefinition

logger = logging.getLogger(__name__)

# Columns rewritten when a definition is upserted over an existing key.
UPSERT_COLUMNS = (
    "field_label",
    "field_type",
    "description",
    "required",
    "options",
    "validation",
    "default_value",
    "order_index",
    "is_active",
)


async def list_definitions(
    db: AsyncSession,
    tenant_id: str,
    object_type: str,
    include_inactive: bool = False,
) -> list[CustomFieldDefinition]:
    stmt = (
        select(CustomFieldDefinition)
        .where(
            CustomFieldDefinition.tenant_id == tenant_id,
            CustomFieldDefinition.object_type == object_type,
        )
        .order_by(CustomFieldDefinition.order_index, CustomFieldDefinition.field_label)
    )
    result = await db.execute(stmt)
    definitions = list(result.scalars().all())
    if include_inactive:
        return definitions
    return [d for d in definitions if d.is_active is not False]


async def get_definition(
    db: AsyncSession, tenant_id: str, defn_id: uuid.UUID
) -> CustomFieldDefinition | None:
    stmt = select(CustomFieldDefinition).where(
        CustomFieldDefinition.id == defn_id,
        CustomFieldDefinition.tenant_id == tenant_id,
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def _find_by_key(
    db: AsyncSession, tenant_id: str, object_type: str, field_key: str
) -> CustomFieldDefinition | None:
    stmt = select(CustomFieldDefinition).where(
        CustomFieldDefinition.tenant_id == tenant_id,
        CustomFieldDefinition.object_type == object_type,
        CustomFieldDefinition.field_key == field_key,
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def upsert_definition(
    db: AsyncSession, tenant_id: str, data: dict[str, Any]
) -> tuple[CustomFieldDefinition, bool]:
    """Insert a definition or update the one with the same natural key.

    The natural key is (tenant_id, object_type, field_key). Returns the
    stored definition and whether it was newly created.
    """
    object_type = data["object_type"]
    field_key = data["field_key"]

    defn = await _find_by_key(db, tenant_id, object_type, field_key)
    if defn is None:
        defn = CustomFieldDefinition(tenant_id=tenant_id, **data)
        db.add(defn)
        try:
            await db.commit()
        except IntegrityError:
            # Lost an insert race on the unique key; fall through to update.
            await db.rollback()
            defn = await _find_by_key(db, tenant_id, object_type, field_key)
            if defn is None:
                raise
        else:
            await db.refresh(defn)
            logger.info(
                "Created custom field %s.%s for tenant %s", object_type, field_key, tenant_id
            )
            return defn, True

    for column in UPSERT_COLUMNS:
        if column in data:
            setattr(defn, column, data[column])
    await db.commit()
    await db.refresh(defn)
    logger.info("Updated custom field %s.%s for tenant %s", object_type, field_key, tenant_id)
    return defn, False


async def update_definition(
    db: AsyncSession, tenant_id: str, defn_id: uuid.UUID, patch: dict[str, Any]
) -> CustomFieldDefinition | None:
    defn = await get_definition(db, tenant_id, defn_id)
    if not defn:
        return None
    for key, value in patch.items():
        setattr(defn, key, value)
    try:
        await db.commit()
    except StaleDataError:
        # Deleted by a concurrent request.
        await db.rollback()
        return None
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(
            "A custom field with this key already exists for the object type"
        ) from exc
    await db.refresh(defn)
    return defn


async def delete_definition(db: AsyncSession, tenant_id: str, defn_id: uuid.UUID) -> bool:
    """Hard-delete a definition.

    Values already stored under its key in records are left in place.
    """
    defn = await get_definition(db, tenant_id, defn_id)
    if not defn:
        return False
    object_type, field_key = defn.object_type, defn.field_key
    await db.delete(defn)
    await db.commit()
    logger.info("Deleted custom field %s.%s for tenant %s", object_type, field_key, tenant_id)
    return True
