"""Logged email model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import (
    Base, CreatedAtMixin, CustomFieldsMixin, RelatedRecordsMixin, UUIDMixin, TenantMixin,
)


class Email(UUIDMixin, CreatedAtMixin, TenantMixin, RelatedRecordsMixin, CustomFieldsMixin, Base):
    __tablename__ = "email"

    subject: Mapped[str] = mapped_column(String(500))
    body: Mapped[str | None] = mapped_column(Text, default=None)
    direction: Mapped[str] = mapped_column(String(20), default="outbound")  # inbound, outbound
    status: Mapped[str] = mapped_column(String(50), default="logged")
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)

    def __repr__(self) -> str:
        return f"<Email {self.subject!r}>"
