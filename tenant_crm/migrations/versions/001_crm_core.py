"""CRM core: custom field definitions and the seven record tables.

Revision ID: 001_crm_core
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_crm_core"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns(with_updated_at: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.String(length=255), nullable=False),
        sa.Column("custom_fields", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]
    if with_updated_at:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return columns


def _link_columns(deal: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("company_id", sa.Uuid(), sa.ForeignKey("company.id", ondelete="SET NULL"), nullable=True),
        sa.Column("contact_id", sa.Uuid(), sa.ForeignKey("contact.id", ondelete="SET NULL"), nullable=True),
    ]
    if deal:
        columns.append(
            sa.Column("deal_id", sa.Uuid(), sa.ForeignKey("deal.id", ondelete="SET NULL"), nullable=True)
        )
    columns.append(sa.Column("owner_id", sa.String(length=255), nullable=True))
    return columns


def _create_record_table(name: str, columns: list[sa.Column], *, with_updated_at: bool = True) -> None:
    op.create_table(
        name,
        *_base_columns(with_updated_at),
        *columns,
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{name}_tenant_id", name, ["tenant_id"], unique=False)
    for column in columns:
        if column.name in {"company_id", "contact_id", "deal_id"}:
            op.create_index(f"ix_{name}_{column.name}", name, [column.name], unique=False)


def upgrade() -> None:
    op.create_table(
        "custom_field_definition",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.String(length=255), nullable=False),
        sa.Column("object_type", sa.String(length=50), nullable=False),
        sa.Column("field_key", sa.String(length=200), nullable=False),
        sa.Column("field_label", sa.String(length=200), nullable=False),
        sa.Column("field_type", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("required", sa.Boolean(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("validation", sa.JSON(), nullable=False),
        sa.Column("default_value", sa.JSON(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "object_type", "field_key", name="uq_cfd_tenant_object_key"),
    )
    op.create_index("ix_custom_field_definition_tenant_id", "custom_field_definition", ["tenant_id"])
    op.create_index("ix_custom_field_definition_object_type", "custom_field_definition", ["object_type"])

    _create_record_table("company", [
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("domain", sa.String(length=255), nullable=True),
        sa.Column("industry", sa.String(length=100), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.String(length=255), nullable=True),
    ])

    _create_record_table("contact", [
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("company_id", sa.Uuid(), sa.ForeignKey("company.id", ondelete="SET NULL"), nullable=True),
        sa.Column("owner_id", sa.String(length=255), nullable=True),
    ])
    op.create_index("ix_contact_tenant_email", "contact", ["tenant_id", "email"])

    _create_record_table("deal", [
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("stage", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("probability", sa.Integer(), nullable=True),
        sa.Column("source", sa.String(length=100), nullable=True),
        sa.Column("close_date", sa.DateTime(timezone=True), nullable=True),
        *_link_columns(deal=False),
    ])

    _create_record_table("email", [
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("direction", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        *_link_columns(),
    ], with_updated_at=False)

    _create_record_table("phone_call", [
        sa.Column("call_type", sa.String(length=20), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("called_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("outcome", sa.String(length=100), nullable=True),
        *_link_columns(),
    ], with_updated_at=False)

    _create_record_table("meeting", [
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("agenda", sa.Text(), nullable=True),
        sa.Column("meeting_type", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("conferencing_link", sa.String(length=500), nullable=True),
        *_link_columns(),
    ])

    _create_record_table("task", [
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("priority", sa.String(length=20), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reminder_at", sa.DateTime(timezone=True), nullable=True),
        *_link_columns(),
    ])


def downgrade() -> None:
    for name in ("task", "meeting", "phone_call", "email", "deal", "contact", "company"):
        op.drop_table(name)
    op.drop_table("custom_field_definition")
