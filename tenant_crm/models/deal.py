"""Deal model."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CustomFieldsMixin, UUIDMixin, TimestampMixin, TenantMixin


class Deal(UUIDMixin, TimestampMixin, TenantMixin, CustomFieldsMixin, Base):
    __tablename__ = "deal"

    name: Mapped[str] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    stage: Mapped[str] = mapped_column(String(50), default="qualification")
    status: Mapped[str] = mapped_column(String(50), default="open")  # open, won, lost
    amount: Mapped[int | None] = mapped_column(Integer, default=None)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    probability: Mapped[int | None] = mapped_column(Integer, default=None)
    source: Mapped[str | None] = mapped_column(String(100), default=None)
    close_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    company_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("company.id", ondelete="SET NULL"), default=None, index=True
    )
    contact_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="SET NULL"), default=None, index=True
    )
    owner_id: Mapped[str | None] = mapped_column(String(255), default=None)

    def __repr__(self) -> str:
        return f"<Deal {self.name!r}>"
