"""Custom field definition admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..enums import ObjectType
from ..errors import ConflictError
from ..schemas.custom_field import CustomFieldDefinitionCreate, CustomFieldDefinitionUpdate
from ..services import custom_field_svc
from ..tenant.deps import get_tenant_id
from .common import parse_id, read_json_object, serialize_model, validate_or_400

router = APIRouter(prefix=f"{settings.api_prefix}/custom-fields", tags=["custom_fields"])

NOT_FOUND = "Field definition not found"


@router.get("/{object_type}")
async def custom_field_list(
    object_type: str,
    include_inactive: bool = Query(True, alias="includeInactive"),
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        object_type = ObjectType(object_type)
    except ValueError:
        raise HTTPException(status_code=400, detail="Unsupported object type") from None
    definitions = await custom_field_svc.list_definitions(
        db, tenant_id, object_type, include_inactive=include_inactive
    )
    return [serialize_model(d) for d in definitions]


@router.post("", status_code=201)
async def custom_field_upsert(
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    data = validate_or_400(CustomFieldDefinitionCreate, await read_json_object(request))
    defn, _created = await custom_field_svc.upsert_definition(db, tenant_id, data.to_columns())
    return serialize_model(defn)


@router.put("/{defn_id}")
async def custom_field_update(
    defn_id: str,
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    key = parse_id(defn_id, NOT_FOUND)
    patch = validate_or_400(CustomFieldDefinitionUpdate, await read_json_object(request))
    try:
        defn = await custom_field_svc.update_definition(db, tenant_id, key, patch.to_patch())
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from None
    if not defn:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize_model(defn)


@router.delete("/{defn_id}", status_code=204)
async def custom_field_delete(
    defn_id: str,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    key = parse_id(defn_id, NOT_FOUND)
    if not await custom_field_svc.delete_definition(db, tenant_id, key):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=204)
