"""Static registry binding each CRM object type to its storage and schemas.

The generic record routes and the list query engine read everything they
need from an :class:`EntityConfig`; a new record type is one more entry in
``ENTITY_CONFIGS``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import InstrumentedAttribute

from .enums import ObjectType
from .models import Base, Company, Contact, Deal, Email, Meeting, PhoneCall, Task
from .schemas.records import (
    CompanyCreate, CompanyUpdate,
    ContactCreate, ContactUpdate,
    DealCreate, DealUpdate,
    EmailCreate, EmailUpdate,
    MeetingCreate, MeetingUpdate,
    PhoneCallCreate, PhoneCallUpdate,
    RecordCreate, RecordUpdate,
    TaskCreate, TaskUpdate,
)


@dataclass(frozen=True)
class EntityConfig:
    base_path: str
    object_type: ObjectType
    model: type[Base]
    create_schema: type[RecordCreate]
    update_schema: type[RecordUpdate]
    search_columns: tuple[str, ...]
    default_sort: str

    def column(self, name: str) -> InstrumentedAttribute:
        return getattr(self.model, name)

    def has_column(self, name: str) -> bool:
        return name in self.model.__table__.columns

    @property
    def has_updated_at(self) -> bool:
        return self.has_column("updated_at")


ENTITY_CONFIGS: tuple[EntityConfig, ...] = (
    EntityConfig(
        base_path="companies",
        object_type=ObjectType.COMPANY,
        model=Company,
        create_schema=CompanyCreate,
        update_schema=CompanyUpdate,
        search_columns=("name", "domain", "industry"),
        default_sort="created_at",
    ),
    EntityConfig(
        base_path="contacts",
        object_type=ObjectType.CONTACT,
        model=Contact,
        create_schema=ContactCreate,
        update_schema=ContactUpdate,
        search_columns=("email", "first_name", "last_name"),
        default_sort="created_at",
    ),
    EntityConfig(
        base_path="deals",
        object_type=ObjectType.DEAL,
        model=Deal,
        create_schema=DealCreate,
        update_schema=DealUpdate,
        search_columns=("name", "status", "stage", "source"),
        default_sort="updated_at",
    ),
    EntityConfig(
        base_path="emails",
        object_type=ObjectType.EMAIL,
        model=Email,
        create_schema=EmailCreate,
        update_schema=EmailUpdate,
        search_columns=("subject", "status", "direction"),
        default_sort="created_at",
    ),
    EntityConfig(
        base_path="phone-calls",
        object_type=ObjectType.PHONE_CALL,
        model=PhoneCall,
        create_schema=PhoneCallCreate,
        update_schema=PhoneCallUpdate,
        search_columns=("subject", "call_type", "outcome"),
        default_sort="created_at",
    ),
    EntityConfig(
        base_path="meetings",
        object_type=ObjectType.MEETING,
        model=Meeting,
        create_schema=MeetingCreate,
        update_schema=MeetingUpdate,
        search_columns=("title", "meeting_type", "status", "location"),
        default_sort="start_time",
    ),
    EntityConfig(
        base_path="tasks",
        object_type=ObjectType.TASK,
        model=Task,
        create_schema=TaskCreate,
        update_schema=TaskUpdate,
        search_columns=("title", "status", "priority"),
        default_sort="due_date",
    ),
)

ENTITY_CONFIGS_BY_TYPE: dict[ObjectType, EntityConfig] = {
    config.object_type: config for config in ENTITY_CONFIGS
}


def get_entity_config(object_type: str) -> EntityConfig:
    """Look up the config for an object type. Raises KeyError if unknown."""
    try:
        return ENTITY_CONFIGS_BY_TYPE[ObjectType(object_type)]
    except ValueError:
        raise KeyError(object_type) from None
