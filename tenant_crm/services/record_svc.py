"""Generic tenant-scoped CRUD, search and pagination over any registered entity."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from ..errors import ConflictError
from ..registry import EntityConfig
from ..schemas.listing import ListQuery

logger = logging.getLogger(__name__)

SORT_COLUMNS = {"createdAt": "created_at", "updatedAt": "updated_at"}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_filter(config: EntityConfig, tenant_id: str, search: str | None = None):
    """Tenant equality, ANDed with an OR of ILIKEs over the searchable columns."""
    clauses = [config.column("tenant_id") == tenant_id]
    if search and config.search_columns:
        pattern = _like_pattern(search)
        clauses.append(
            or_(*(
                config.column(name).ilike(pattern, escape="\\")
                for name in config.search_columns
            ))
        )
    return and_(*clauses)


def resolve_sort_column(config: EntityConfig, sort: str | None):
    name = SORT_COLUMNS.get(sort or "")
    if not name or not config.has_column(name):
        name = config.default_sort
    return config.column(name)


async def list_records(
    db: AsyncSession,
    config: EntityConfig,
    tenant_id: str,
    query: ListQuery,
) -> tuple[list[Any], int]:
    """List one page of records. Returns (records, total matching rows)."""
    where = build_filter(config, tenant_id, query.search_term)

    count_stmt = select(func.count()).select_from(config.model).where(where)
    total = (await db.execute(count_stmt)).scalar() or 0

    sort_column = resolve_sort_column(config, query.sort)
    order = sort_column.asc() if query.direction == "asc" else sort_column.desc()
    stmt = (
        select(config.model)
        .where(where)
        .order_by(order, config.column("id"))
        .offset(query.offset)
        .limit(query.page_size)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all()), total


async def get_record(
    db: AsyncSession, config: EntityConfig, tenant_id: str, record_id: uuid.UUID
) -> Any | None:
    stmt = select(config.model).where(
        config.column("tenant_id") == tenant_id,
        config.column("id") == record_id,
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def _commit(db: AsyncSession, config: EntityConfig) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(
            f"Could not save {config.object_type}: a referenced record does not exist"
        ) from exc


async def create_record(
    db: AsyncSession,
    config: EntityConfig,
    tenant_id: str,
    columns: dict[str, Any],
    custom_fields: dict[str, Any],
) -> Any:
    record = config.model(**columns, tenant_id=tenant_id, custom_fields=custom_fields)
    if config.has_updated_at:
        record.updated_at = datetime.now(timezone.utc)
    db.add(record)
    await _commit(db, config)
    await db.refresh(record)
    logger.info("Created %s %s for tenant %s", config.object_type, record.id, tenant_id)
    return record


async def update_record(
    db: AsyncSession,
    config: EntityConfig,
    record: Any,
    columns: dict[str, Any],
    custom_fields: dict[str, Any] | None = None,
) -> Any | None:
    """Apply a partial fixed-column patch and, if given, the merged custom fields.

    Returns None when the record was deleted by a concurrent request.
    """
    record_id = record.id
    for key, value in columns.items():
        setattr(record, key, value)
    if custom_fields is not None:
        record.custom_fields = custom_fields
    if config.has_updated_at:
        record.updated_at = datetime.now(timezone.utc)
    try:
        await _commit(db, config)
    except StaleDataError:
        await db.rollback()
        logger.info("Update of %s %s lost to a concurrent delete", config.object_type, record_id)
        return None
    await db.refresh(record)
    logger.info("Updated %s %s for tenant %s", config.object_type, record.id, record.tenant_id)
    return record


async def delete_record(
    db: AsyncSession, config: EntityConfig, tenant_id: str, record_id: uuid.UUID
) -> bool:
    """Delete a record. Returns True if found (for this tenant) and deleted."""
    record = await get_record(db, config, tenant_id, record_id)
    if not record:
        return False
    await db.delete(record)
    await _commit(db, config)
    logger.info("Deleted %s %s for tenant %s", config.object_type, record_id, tenant_id)
    return True
