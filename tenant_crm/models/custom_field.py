"""Per-tenant custom field definitions."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin, TimestampMixin, TenantMixin


class CustomFieldDefinition(UUIDMixin, TimestampMixin, TenantMixin, Base):
    """Describes one extra field available on one object type for one tenant."""

    __tablename__ = "custom_field_definition"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "object_type", "field_key", name="uq_cfd_tenant_object_key"
        ),
    )

    object_type: Mapped[str] = mapped_column(String(50), index=True)
    field_key: Mapped[str] = mapped_column(String(200))
    field_label: Mapped[str] = mapped_column(String(200))
    field_type: Mapped[str] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    required: Mapped[bool] = mapped_column(Boolean, default=False)
    options: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    validation: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    default_value: Mapped[Any | None] = mapped_column(JSON, default=None)
    order_index: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"<CustomFieldDef {self.object_type}.{self.field_key}>"
