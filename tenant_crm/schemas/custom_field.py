"""Custom field definition schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from ..enums import FieldType, ObjectType
from .base import CamelModel, reject_null

FIELD_KEY_PATTERN = r"^[a-z0-9_]+$"

DefaultValue = str | int | float | bool | list[str]


class FieldOption(CamelModel):
    label: str = Field(min_length=1)
    value: str = Field(min_length=1)


class FieldValidationRules(CamelModel):
    min: float | None = None
    max: float | None = None
    pattern: str | None = None


class CustomFieldDefinitionCreate(CamelModel):
    object_type: ObjectType
    field_key: str = Field(pattern=FIELD_KEY_PATTERN, max_length=200)
    field_label: str = Field(min_length=1, max_length=200)
    field_type: FieldType
    description: str | None = None
    required: bool = False
    default_value: DefaultValue | None = None
    options: list[FieldOption] = Field(default_factory=list)
    validation: FieldValidationRules = Field(default_factory=FieldValidationRules)
    order_index: int = Field(default=0, ge=0)
    is_active: bool = True

    def to_columns(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["validation"] = self.validation.model_dump(exclude_none=True)
        return data


class CustomFieldDefinitionUpdate(CamelModel):
    object_type: ObjectType | None = None
    field_key: str | None = Field(default=None, pattern=FIELD_KEY_PATTERN, max_length=200)
    field_label: str | None = Field(default=None, min_length=1, max_length=200)
    field_type: FieldType | None = None
    description: str | None = None
    required: bool | None = None
    default_value: DefaultValue | None = None
    options: list[FieldOption] | None = None
    validation: FieldValidationRules | None = None
    order_index: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    check_not_null = field_validator(
        "object_type", "field_key", "field_label", "field_type",
        "required", "order_index", "is_active",
    )(reject_null)

    def to_patch(self) -> dict[str, Any]:
        patch = self.model_dump(mode="json", exclude_unset=True)
        if "options" in patch and patch["options"] is None:
            patch["options"] = []
        if "validation" in patch:
            rules = self.validation
            patch["validation"] = rules.model_dump(exclude_none=True) if rules else {}
        return patch
