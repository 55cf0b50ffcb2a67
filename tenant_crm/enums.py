"""Closed vocabularies shared by the models, schemas and services."""

from __future__ import annotations

from enum import StrEnum


class ObjectType(StrEnum):
    COMPANY = "company"
    CONTACT = "contact"
    DEAL = "deal"
    EMAIL = "email"
    PHONE_CALL = "phone_call"
    MEETING = "meeting"
    TASK = "task"


class FieldType(StrEnum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CURRENCY = "currency"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    SELECT = "select"
    MULTISELECT = "multiselect"
