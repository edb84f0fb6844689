"""
tablemeta CLI Entry Point

Command-line interface for inspecting table columns and indexes
on the configured databases.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy import create_engine

from tablemeta import __version__
from tablemeta.config import Settings, get_settings, load_settings
from tablemeta.extractors import IntrospectionError, get_columns_with_indexes, select_provider
from tablemeta.models.schema import Column
from tablemeta.utils.logger import get_logger, setup_logging

app = typer.Typer(
    name="tablemeta",
    help="tablemeta - Dialect-independent table column and index metadata",
    add_completion=False,
)
console = Console()
logger = get_logger(__name__)


def _load(env_file: Optional[Path], verbose: bool) -> Settings:
    settings = load_settings(env_file) if env_file else get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
    )
    return settings


def _format_indexes(column: Column) -> str:
    parts = []
    for idx in column.indexes:
        flag = "unique" if idx.is_unique else "non-unique"
        parts.append(f"{idx.index_name}#{idx.seq_in_index} ({flag})")
    return ", ".join(parts)


def _render_columns(title: str, columns: list[Column]) -> None:
    table = Table(title=title)
    table.add_column("Column", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Null", style="yellow")
    table.add_column("Key", style="magenta")
    table.add_column("Default")
    table.add_column("Extra")
    table.add_column("Comment")
    table.add_column("Indexes", style="blue")

    for col in columns:
        table.add_row(
            col.column_name,
            col.column_type,
            "YES" if col.is_nullable else "NO",
            col.column_key,
            "" if col.column_default is None else col.column_default,
            col.extra,
            col.column_comment,
            _format_indexes(col),
        )

    console.print(table)


@app.command()
def columns(
    table_name: str = typer.Argument(..., help="Table to inspect"),
    db: Optional[str] = typer.Option(None, "--db", help="Configured database name"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema/database name"),
    indexes: Optional[bool] = typer.Option(
        None, "--indexes/--no-indexes", help="Attach index metadata (default from settings)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    env_file: Optional[Path] = typer.Option(None, "--env", "-e", help="Path to .env file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Show the columns of a table, with the indexes each one belongs to.
    """
    settings = _load(env_file, verbose)

    try:
        db_config = settings.get_database(db)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    schema_name = schema or db_config.get_default_schema()
    include_indexes = settings.include_indexes if indexes is None else indexes

    engine = create_engine(db_config.get_connection_string())
    try:
        with engine.connect() as conn:
            provider = select_provider(conn)
            if include_indexes and not provider.supports_indexes:
                logger.warning(f"Index metadata is not available for {provider.dialect}; showing columns only")
                include_indexes = False
            result = get_columns_with_indexes(conn, schema_name, table_name, include_indexes)
    except IntrospectionError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Failed to inspect {schema_name}.{table_name}: {escape(str(e))}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
    finally:
        engine.dispose()

    if as_json:
        typer.echo(json.dumps([col.to_dict() for col in result], ensure_ascii=False, indent=2))
        return

    if not result:
        console.print(f"[yellow]No columns found for {schema_name}.{table_name}[/yellow]")
        return

    _render_columns(f"{db_config.name}: {schema_name}.{table_name}", result)


@app.command()
def config(
    env_file: Optional[Path] = typer.Option(None, "--env", "-e", help="Path to .env file"),
):
    """
    Show current configuration.
    """
    settings = load_settings(env_file) if env_file else get_settings()

    console.print("\n[bold blue]tablemeta Configuration[/bold blue]")
    console.print(f"Log level: {settings.log_level}")
    console.print(f"Include indexes: {settings.include_indexes}")

    if not settings.databases:
        console.print("[yellow]No databases configured.[/yellow]")
        console.print("Example: DB_SHOP_TYPE=mysql, DB_SHOP_HOST=localhost, ...")
        return

    table = Table(title="Configured Databases")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Host", style="yellow")
    table.add_column("Database", style="magenta")
    table.add_column("Schema")

    for db in settings.databases.values():
        host = "-" if db.db_type == "sqlite" else f"{db.host}:{db.port}"
        table.add_row(db.name, db.db_type, host, db.database, db.get_default_schema())

    console.print(table)


@app.command()
def version():
    """Show version."""
    console.print(f"tablemeta {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
