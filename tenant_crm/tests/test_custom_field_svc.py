"""Test the custom field definition store."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_crm.errors import ConflictError
from tenant_crm.models.custom_field import CustomFieldDefinition
from tenant_crm.services import custom_field_svc

from .conftest import TENANT_A, TENANT_B


def _field(key: str, label: str, **kwargs) -> dict:
    data = {
        "object_type": "deal",
        "field_key": key,
        "field_label": label,
        "field_type": "text",
    }
    data.update(kwargs)
    return data


@pytest.mark.asyncio
async def test_upsert_is_idempotent_by_natural_key(db: AsyncSession):
    first, created = await custom_field_svc.upsert_definition(
        db, TENANT_A, _field("region", "Region")
    )
    assert created is True

    second, created = await custom_field_svc.upsert_definition(
        db, TENANT_A, _field("region", "Sales Region", required=True)
    )
    assert created is False
    assert second.id == first.id
    assert second.field_label == "Sales Region"
    assert second.required is True

    count = (await db.execute(
        select(func.count()).select_from(CustomFieldDefinition)
    )).scalar()
    assert count == 1


@pytest.mark.asyncio
async def test_same_key_is_separate_per_tenant_and_object_type(db: AsyncSession):
    await custom_field_svc.upsert_definition(db, TENANT_A, _field("region", "Region"))
    await custom_field_svc.upsert_definition(db, TENANT_B, _field("region", "Region"))
    await custom_field_svc.upsert_definition(
        db, TENANT_A, _field("region", "Region", object_type="company")
    )

    assert len(await custom_field_svc.list_definitions(db, TENANT_A, "deal")) == 1
    assert len(await custom_field_svc.list_definitions(db, TENANT_B, "deal")) == 1
    assert len(await custom_field_svc.list_definitions(db, TENANT_A, "company")) == 1


@pytest.mark.asyncio
async def test_list_orders_by_index_then_label_and_hides_inactive(db: AsyncSession):
    await custom_field_svc.upsert_definition(db, TENANT_A, _field("b", "Bravo", order_index=1))
    await custom_field_svc.upsert_definition(db, TENANT_A, _field("a", "Alpha", order_index=1))
    await custom_field_svc.upsert_definition(db, TENANT_A, _field("z", "Zulu", order_index=0))
    await custom_field_svc.upsert_definition(
        db, TENANT_A, _field("old", "Old", order_index=0, is_active=False)
    )

    active = await custom_field_svc.list_definitions(db, TENANT_A, "deal")
    assert [d.field_key for d in active] == ["z", "a", "b"]

    everything = await custom_field_svc.list_definitions(
        db, TENANT_A, "deal", include_inactive=True
    )
    assert [d.field_key for d in everything] == ["old", "z", "a", "b"]


@pytest.mark.asyncio
async def test_update_definition_is_tenant_scoped(db: AsyncSession):
    defn, _ = await custom_field_svc.upsert_definition(db, TENANT_A, _field("region", "Region"))

    assert await custom_field_svc.update_definition(
        db, TENANT_B, defn.id, {"field_label": "Hijacked"}
    ) is None

    updated = await custom_field_svc.update_definition(
        db, TENANT_A, defn.id, {"field_label": "Territory", "is_active": False}
    )
    assert updated.field_label == "Territory"
    assert updated.is_active is False


@pytest.mark.asyncio
async def test_update_to_existing_key_conflicts(db: AsyncSession):
    await custom_field_svc.upsert_definition(db, TENANT_A, _field("region", "Region"))
    other, _ = await custom_field_svc.upsert_definition(db, TENANT_A, _field("segment", "Segment"))

    with pytest.raises(ConflictError):
        await custom_field_svc.update_definition(db, TENANT_A, other.id, {"field_key": "region"})


@pytest.mark.asyncio
async def test_delete_definition(db: AsyncSession):
    defn, _ = await custom_field_svc.upsert_definition(db, TENANT_A, _field("region", "Region"))

    assert await custom_field_svc.delete_definition(db, TENANT_B, defn.id) is False
    assert await custom_field_svc.delete_definition(db, TENANT_A, defn.id) is True
    assert await custom_field_svc.delete_definition(db, TENANT_A, defn.id) is False
    assert await custom_field_svc.delete_definition(db, TENANT_A, uuid.uuid4()) is False
