"""tenant-crm CLI - serve the API and manage custom field definitions."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import database
from .config import settings
from .enums import ObjectType
from .schemas.base import format_validation_error
from .schemas.custom_field import CustomFieldDefinitionCreate

app = typer.Typer(
    name="tenant-crm",
    help="Multi-tenant CRM data layer",
    no_args_is_help=True,
)
console = Console()

fields_app = typer.Typer(help="Custom field definition management")
app.add_typer(fields_app, name="fields")


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
):
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@app.command("serve")
def serve(
    port: int = typer.Option(8020, "--port", "-p", help="Port to run on"),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Launch the CRM JSON API."""
    import uvicorn

    console.print(f"[bold cyan]Starting Tenant CRM at http://{host}:{port}[/bold cyan]")
    uvicorn.run("tenant_crm.app:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db():
    """Create all tables directly (local SQLite setups; use Alembic elsewhere)."""
    from .models import Base

    async def _run() -> None:
        async with database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_run())
    console.print("[green]Database tables created[/green]")


def _parse_object_type(value: str) -> ObjectType:
    try:
        return ObjectType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in ObjectType)
        raise typer.BadParameter(f"must be one of: {allowed}") from None


@fields_app.command("list")
def fields_list(
    tenant_id: str = typer.Argument(..., help="Tenant id"),
    object_type: str = typer.Argument(..., help="Object type, e.g. deal"),
    include_inactive: bool = typer.Option(False, "--all", help="Include inactive fields"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List custom field definitions for a tenant and object type."""
    from .services import custom_field_svc

    kind = _parse_object_type(object_type)

    async def _run() -> list[dict[str, Any]]:
        async with database.async_session_factory() as db:
            defs = await custom_field_svc.list_definitions(
                db, tenant_id, kind, include_inactive=include_inactive
            )
            return [
                {
                    "id": str(d.id),
                    "fieldKey": d.field_key,
                    "fieldLabel": d.field_label,
                    "fieldType": d.field_type,
                    "required": d.required,
                    "isActive": d.is_active,
                    "orderIndex": d.order_index,
                }
                for d in defs
            ]

    rows = asyncio.run(_run())
    if json_output:
        console.print_json(json.dumps(rows))
        return

    table = Table(title=f"{kind.value} custom fields ({tenant_id})")
    table.add_column("Key", style="cyan")
    table.add_column("Label")
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Active")
    for row in rows:
        table.add_row(
            row["fieldKey"], row["fieldLabel"], row["fieldType"],
            "yes" if row["required"] else "no",
            "yes" if row["isActive"] else "no",
        )
    console.print(table)


@fields_app.command("load")
def fields_load(
    tenant_id: str = typer.Argument(..., help="Tenant id"),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of definitions"),
):
    """Upsert definitions from a JSON file. Safe to re-run."""
    from .services import custom_field_svc

    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON in {path}: {exc}[/red]")
        raise typer.Exit(1)
    if not isinstance(raw, list):
        raw = [raw]

    definitions: list[CustomFieldDefinitionCreate] = []
    for index, item in enumerate(raw):
        try:
            definitions.append(CustomFieldDefinitionCreate.model_validate(item))
        except ValidationError as exc:
            console.print(f"[red]Definition #{index}: {format_validation_error(exc)}[/red]")
            raise typer.Exit(1)

    async def _run() -> list[tuple[str, bool]]:
        outcomes = []
        async with database.async_session_factory() as db:
            for definition in definitions:
                defn, created = await custom_field_svc.upsert_definition(
                    db, tenant_id, definition.to_columns()
                )
                outcomes.append((f"{defn.object_type}.{defn.field_key}", created))
        return outcomes

    for key, created in asyncio.run(_run()):
        verb = "created" if created else "updated"
        console.print(f"  {key}: [green]{verb}[/green]")
    console.print(f"[bold]{len(definitions)} definition(s) loaded for {tenant_id}[/bold]")


if __name__ == "__main__":
    app()
