"""FastAPI application for the tenant CRM data layer."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .tenant.middleware import TenantMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger("tenant_crm").setLevel(settings.log_level.upper())
    # Auto-create tables for SQLite (local dev); PostgreSQL uses Alembic migrations
    if "sqlite" in settings.database_url:
        from .database import engine
        from .models import Base
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)

app.add_middleware(TenantMiddleware)

# Import and register routers
from .routers import custom_fields, health, records  # noqa: E402

app.include_router(custom_fields.router)
for record_router in records.routers:
    app.include_router(record_router)
app.include_router(health.router)
