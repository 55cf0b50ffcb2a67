"""Fixed-column schemas for the seven CRM record types.

Each ``*Create`` schema validates a full insert; each ``*Update`` schema is
the partial form used by PUT, where only the keys actually sent are applied.
``custom_fields`` rides along untyped and is checked separately against the
tenant's field definitions.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from .base import CamelModel, reject_null


class RecordCreate(CamelModel):
    custom_fields: dict[str, Any] | None = None

    def fixed_columns(self) -> dict[str, Any]:
        return self.model_dump(exclude={"custom_fields"})


class RecordUpdate(CamelModel):
    custom_fields: dict[str, Any] | None = None

    check_custom_fields = field_validator("custom_fields")(reject_null)

    def fixed_columns(self) -> dict[str, Any]:
        return self.model_dump(exclude={"custom_fields"}, exclude_unset=True)

    @property
    def has_custom_fields(self) -> bool:
        return "custom_fields" in self.model_fields_set


# -- Company ----------------------------------------------------------------

class CompanyCreate(RecordCreate):
    name: str = Field(min_length=1, max_length=200)
    domain: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    description: str | None = None
    owner_id: str | None = None


class CompanyUpdate(RecordUpdate):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    domain: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    description: str | None = None
    owner_id: str | None = None

    check_not_null = field_validator("name")(reject_null)


# -- Contact ----------------------------------------------------------------

class ContactCreate(RecordCreate):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    title: str | None = Field(default=None, max_length=200)
    company_id: uuid.UUID | None = None
    owner_id: str | None = None


class ContactUpdate(RecordUpdate):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    title: str | None = Field(default=None, max_length=200)
    company_id: uuid.UUID | None = None
    owner_id: str | None = None

    check_not_null = field_validator("first_name")(reject_null)


# -- Deal -------------------------------------------------------------------

class DealCreate(RecordCreate):
    name: str = Field(min_length=1, max_length=300)
    description: str | None = None
    stage: str = Field(default="qualification", min_length=1, max_length=50)
    status: str = Field(default="open", min_length=1, max_length=50)
    amount: int | None = None
    currency: str = Field(default="USD", min_length=3, max_length=3)
    probability: int | None = Field(default=None, ge=0, le=100)
    source: str | None = Field(default=None, max_length=100)
    close_date: datetime | None = None
    company_id: uuid.UUID | None = None
    contact_id: uuid.UUID | None = None
    owner_id: str | None = None


class DealUpdate(RecordUpdate):
    name: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    stage: str | None = Field(default=None, min_length=1, max_length=50)
    status: str | None = Field(default=None, min_length=1, max_length=50)
    amount: int | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    probability: int | None = Field(default=None, ge=0, le=100)
    source: str | None = Field(default=None, max_length=100)
    close_date: datetime | None = None
    company_id: uuid.UUID | None = None
    contact_id: uuid.UUID | None = None
    owner_id: str | None = None

    check_not_null = field_validator("name", "stage", "status", "currency")(reject_null)


# -- Activities share their links to company / contact / deal ---------------

class ActivityLinks(CamelModel):
    company_id: uuid.UUID | None = None
    contact_id: uuid.UUID | None = None
    deal_id: uuid.UUID | None = None
    owner_id: str | None = None


class EmailCreate(ActivityLinks, RecordCreate):
    subject: str = Field(min_length=1, max_length=500)
    body: str | None = None
    direction: str = Field(default="outbound", pattern=r"^(inbound|outbound)$")
    status: str = Field(default="logged", min_length=1, max_length=50)
    sent_at: datetime | None = None


class EmailUpdate(ActivityLinks, RecordUpdate):
    subject: str | None = Field(default=None, min_length=1, max_length=500)
    body: str | None = None
    direction: str | None = Field(default=None, pattern=r"^(inbound|outbound)$")
    status: str | None = Field(default=None, min_length=1, max_length=50)
    sent_at: datetime | None = None

    check_not_null = field_validator("subject", "direction", "status")(reject_null)


class PhoneCallCreate(ActivityLinks, RecordCreate):
    call_type: str = Field(default="outbound", pattern=r"^(inbound|outbound)$")
    subject: str | None = Field(default=None, max_length=500)
    notes: str | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    called_at: datetime | None = None
    outcome: str | None = Field(default=None, max_length=100)


class PhoneCallUpdate(ActivityLinks, RecordUpdate):
    call_type: str | None = Field(default=None, pattern=r"^(inbound|outbound)$")
    subject: str | None = Field(default=None, max_length=500)
    notes: str | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    called_at: datetime | None = None
    outcome: str | None = Field(default=None, max_length=100)

    check_not_null = field_validator("call_type")(reject_null)


class MeetingCreate(ActivityLinks, RecordCreate):
    title: str = Field(min_length=1, max_length=300)
    agenda: str | None = None
    meeting_type: str | None = Field(default=None, max_length=50)
    status: str = Field(default="scheduled", min_length=1, max_length=50)
    start_time: datetime | None = None
    end_time: datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    conferencing_link: str | None = Field(default=None, max_length=500)


class MeetingUpdate(ActivityLinks, RecordUpdate):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    agenda: str | None = None
    meeting_type: str | None = Field(default=None, max_length=50)
    status: str | None = Field(default=None, min_length=1, max_length=50)
    start_time: datetime | None = None
    end_time: datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    conferencing_link: str | None = Field(default=None, max_length=500)

    check_not_null = field_validator("title", "status")(reject_null)


class TaskCreate(ActivityLinks, RecordCreate):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    status: str = Field(default="open", min_length=1, max_length=50)
    priority: str = Field(default="normal", min_length=1, max_length=20)
    due_date: datetime | None = None
    completed_at: datetime | None = None
    reminder_at: datetime | None = None


class TaskUpdate(ActivityLinks, RecordUpdate):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    status: str | None = Field(default=None, min_length=1, max_length=50)
    priority: str | None = Field(default=None, min_length=1, max_length=20)
    due_date: datetime | None = None
    completed_at: datetime | None = None
    reminder_at: datetime | None = None

    check_not_null = field_validator("title", "status", "priority")(reject_null)
