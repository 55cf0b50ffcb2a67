"""Base model classes and mixins for CRM models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    """Adds a UUID primary key."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )


class CreatedAtMixin:
    """Adds a created_at column only (append-only activity tables)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class TimestampMixin(CreatedAtMixin):
    """Adds created_at / updated_at columns."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class TenantMixin:
    """Adds tenant_id for multi-tenant isolation.

    Tenants live outside this service, so the id is an opaque string
    rather than a foreign key.
    """

    tenant_id: Mapped[str] = mapped_column(String(255), index=True)


class CustomFieldsMixin:
    """Adds the JSON map holding tenant-defined custom field values."""

    custom_fields: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)


class RelatedRecordsMixin:
    """Optional links to the company, contact and deal an activity belongs to."""

    company_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("company.id", ondelete="SET NULL"), default=None, index=True
    )
    contact_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="SET NULL"), default=None, index=True
    )
    deal_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("deal.id", ondelete="SET NULL"), default=None, index=True
    )
    owner_id: Mapped[str | None] = mapped_column(String(255), default=None)
