"""CRM models - re-exports all models and Base.metadata."""

from .base import Base, UUIDMixin, CreatedAtMixin, TimestampMixin, TenantMixin, CustomFieldsMixin
from .custom_field import CustomFieldDefinition
from .company import Company
from .contact import Contact
from .deal import Deal
from .email import Email
from .phone_call import PhoneCall
from .meeting import Meeting
from .task import Task

__all__ = [
    "Base",
    "UUIDMixin",
    "CreatedAtMixin",
    "TimestampMixin",
    "TenantMixin",
    "CustomFieldsMixin",
    "CustomFieldDefinition",
    "Company",
    "Contact",
    "Deal",
    "Email",
    "PhoneCall",
    "Meeting",
    "Task",
]
