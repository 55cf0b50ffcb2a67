"""Meeting model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import (
    Base, CustomFieldsMixin, RelatedRecordsMixin, UUIDMixin, TimestampMixin, TenantMixin,
)


class Meeting(UUIDMixin, TimestampMixin, TenantMixin, RelatedRecordsMixin, CustomFieldsMixin, Base):
    __tablename__ = "meeting"

    title: Mapped[str] = mapped_column(String(300))
    agenda: Mapped[str | None] = mapped_column(Text, default=None)
    meeting_type: Mapped[str | None] = mapped_column(String(50), default=None)
    status: Mapped[str] = mapped_column(String(50), default="scheduled")
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    location: Mapped[str | None] = mapped_column(String(255), default=None)
    conferencing_link: Mapped[str | None] = mapped_column(String(500), default=None)

    def __repr__(self) -> str:
        return f"<Meeting {self.title!r}>"
