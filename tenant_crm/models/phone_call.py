"""Logged phone call model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import (
    Base, CreatedAtMixin, CustomFieldsMixin, RelatedRecordsMixin, UUIDMixin, TenantMixin,
)


class PhoneCall(UUIDMixin, CreatedAtMixin, TenantMixin, RelatedRecordsMixin, CustomFieldsMixin, Base):
    __tablename__ = "phone_call"

    call_type: Mapped[str] = mapped_column(String(20), default="outbound")
    subject: Mapped[str | None] = mapped_column(String(500), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, default=None)
    called_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    outcome: Mapped[str | None] = mapped_column(String(100), default=None)

    def __repr__(self) -> str:
        return f"<PhoneCall {self.call_type} {self.subject!r}>"
