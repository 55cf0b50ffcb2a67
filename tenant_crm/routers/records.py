"""Generic CRUD routes, one router per registered CRM entity."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..errors import ConflictError
from ..registry import ENTITY_CONFIGS, EntityConfig
from ..schemas.listing import ListQuery
from ..services import custom_field_validation, record_svc
from ..tenant.deps import get_tenant_id
from .common import parse_id, read_json_object, serialize_model, validate_or_400

NOT_FOUND = "Record not found"


def build_record_router(config: EntityConfig) -> APIRouter:
    """List/get/create/update/delete handlers for one entity config."""
    router = APIRouter(
        prefix=f"{settings.api_prefix}/{config.base_path}",
        tags=[config.base_path],
    )
    name = config.object_type.value

    @router.get("", name=f"{name}_list")
    async def record_list(
        request: Request,
        tenant_id: str = Depends(get_tenant_id),
        db: AsyncSession = Depends(get_db),
    ):
        query = validate_or_400(ListQuery, dict(request.query_params))
        records, total = await record_svc.list_records(db, config, tenant_id, query)
        return {
            "data": [serialize_model(r) for r in records],
            "pagination": {
                "page": query.page,
                "pageSize": query.page_size,
                "total": total,
                "totalPages": (total + query.page_size - 1) // query.page_size,
            },
        }

    @router.get("/{record_id}", name=f"{name}_detail")
    async def record_detail(
        record_id: str,
        tenant_id: str = Depends(get_tenant_id),
        db: AsyncSession = Depends(get_db),
    ):
        record = await record_svc.get_record(db, config, tenant_id, parse_id(record_id, NOT_FOUND))
        if not record:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return serialize_model(record)

    @router.post("", name=f"{name}_create", status_code=201)
    async def record_create(
        request: Request,
        tenant_id: str = Depends(get_tenant_id),
        db: AsyncSession = Depends(get_db),
    ):
        data = validate_or_400(config.create_schema, await read_json_object(request))
        result = await custom_field_validation.validate_custom_fields(
            db, tenant_id, config.object_type, data.custom_fields, enforce_required=True
        )
        if not result.valid:
            raise HTTPException(status_code=400, detail=", ".join(result.errors))
        try:
            record = await record_svc.create_record(
                db, config, tenant_id, data.fixed_columns(), result.values
            )
        except ConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from None
        return serialize_model(record)

    @router.put("/{record_id}", name=f"{name}_update")
    async def record_update(
        record_id: str,
        request: Request,
        tenant_id: str = Depends(get_tenant_id),
        db: AsyncSession = Depends(get_db),
    ):
        data = validate_or_400(config.update_schema, await read_json_object(request))
        record = await record_svc.get_record(db, config, tenant_id, parse_id(record_id, NOT_FOUND))
        if not record:
            raise HTTPException(status_code=404, detail=NOT_FOUND)

        custom_fields = None
        if data.has_custom_fields:
            result = await custom_field_validation.validate_custom_fields(
                db, tenant_id, config.object_type, data.custom_fields,
                existing_values=record.custom_fields or {},
            )
            if not result.valid:
                raise HTTPException(status_code=400, detail=", ".join(result.errors))
            custom_fields = result.values

        try:
            record = await record_svc.update_record(
                db, config, record, data.fixed_columns(), custom_fields
            )
        except ConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from None
        if not record:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return serialize_model(record)

    @router.delete("/{record_id}", name=f"{name}_delete", status_code=204)
    async def record_delete(
        record_id: str,
        tenant_id: str = Depends(get_tenant_id),
        db: AsyncSession = Depends(get_db),
    ):
        deleted = await record_svc.delete_record(
            db, config, tenant_id, parse_id(record_id, NOT_FOUND)
        )
        if not deleted:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return Response(status_code=204)

    return router


routers = [build_record_router(config) for config in ENTITY_CONFIGS]
