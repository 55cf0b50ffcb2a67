"""Contact model."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CustomFieldsMixin, UUIDMixin, TimestampMixin, TenantMixin


class Contact(UUIDMixin, TimestampMixin, TenantMixin, CustomFieldsMixin, Base):
    __tablename__ = "contact"
    __table_args__ = (
        Index("ix_contact_tenant_email", "tenant_id", "email"),
    )

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100), default=None)
    email: Mapped[str | None] = mapped_column(String(255), default=None)
    phone: Mapped[str | None] = mapped_column(String(50), default=None)
    title: Mapped[str | None] = mapped_column(String(200), default=None)
    company_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("company.id", ondelete="SET NULL"), default=None, index=True
    )
    owner_id: Mapped[str | None] = mapped_column(String(255), default=None)

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or "Unnamed"

    def __repr__(self) -> str:
        return f"<Contact {self.full_name!r}>"
