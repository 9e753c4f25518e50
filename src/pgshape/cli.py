"""
Command-line interface for pgshape.
"""

import asyncio
import logging
import sys
from functools import wraps
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from . import __version__
from .config import LoggingConfig, PgShapeConfig
from .database.connection import ConnectionPool
from .database.introspection import SchemaIntrospector
from .exceptions import PgShapeError
from .schema.differ import diff as diff_table
from .schema.migrator import MigrationResult, MigrationStatus, SchemaMigrator
from .schema.table import Table


console = Console()


def handle_errors(func):
    """Decorator to handle errors gracefully in CLI commands."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PgShapeError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            sys.exit(0)
    return wrapper


def setup_logging(config: LoggingConfig, debug: bool = False) -> None:
    """Configure the root logger from the logging section of the config."""
    level = logging.DEBUG if debug else getattr(logging, config.level)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(
            RotatingFileHandler(
                config.file,
                maxBytes=config.max_size,
                backupCount=config.backup_count,
            )
        )
    logging.basicConfig(level=level, format=config.format, handlers=handlers, force=True)


def _load_config(ctx: click.Context, path: str) -> PgShapeConfig:
    pg_config = PgShapeConfig.from_yaml(path)
    setup_logging(pg_config.logging, debug=ctx.obj.get("debug", False))
    return pg_config


def _pg_url_option(func):
    return click.option(
        "--pg-url",
        envvar="PGSHAPE_PG_URL",
        help="PostgreSQL URL (overrides pg_url in the config file)",
    )(func)


def _config_option(func):
    return click.option(
        "--config",
        "-c",
        type=click.Path(exists=True),
        required=True,
        help="Configuration file path",
    )(func)


@click.group()
@click.version_option(__version__)
@click.option(
    "--debug", is_flag=True, help="Enable debug logging"
)
@click.pass_context
def main(ctx, debug):
    """pgshape: Declarative PostgreSQL table synchronization."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@main.command()
@_config_option
@click.pass_context
@handle_errors
def validate_config(ctx, config: str):
    """Validate configuration file."""
    console.print(f"Validating configuration: {config}")
    
    pg_config = _load_config(ctx, config)
    pg_config.validate_config()
    
    console.print("[green]✓[/green] Configuration is valid")
    _display_tables(pg_config.tables())


@main.command()
@_config_option
@click.pass_context
@handle_errors
def ddl(ctx, config: str):
    """Print the DDL for every integration table."""
    pg_config = _load_config(ctx, config)
    for stmt in pg_config.ddl():
        click.echo(f"{stmt};")


@main.command()
@_config_option
@_pg_url_option
@click.option("--dry-run", is_flag=True, help="Show statements without executing them")
@click.option(
    "--continue-on-error",
    is_flag=True,
    help="Keep migrating remaining tables after a failure",
)
@click.pass_context
@handle_errors
def migrate(ctx, config: str, pg_url: Optional[str], dry_run: bool, continue_on_error: bool):
    """Create tables and add missing columns."""
    pg_config = _load_config(ctx, config)
    pg_config.validate_config()
    dry_run = dry_run or pg_config.dry_run
    
    async def run_migrations():
        async with ConnectionPool(pg_config.connection_config(pg_url)) as pool:
            migrator = SchemaMigrator(pool, dry_run=dry_run)
            results = await migrator.migrate_all(
                pg_config.tables(), stop_on_error=not continue_on_error
            )
            return results, migrator.get_summary(results)
    
    results, summary = asyncio.run(run_migrations())
    
    for result in results:
        _display_migration_result(result)
    
    console.print(
        f"\n[bold]{summary['succeeded']}/{summary['total_tables']} tables migrated, "
        f"{summary['columns_added']} columns added "
        f"({summary['total_execution_time_ms']:.1f}ms)[/bold]"
    )
    if summary["failed"]:
        sys.exit(1)


@main.command()
@_config_option
@_pg_url_option
@click.pass_context
@handle_errors
def diff(ctx, config: str, pg_url: Optional[str]):
    """Show declared columns missing from, or undeclared in, live tables."""
    pg_config = _load_config(ctx, config)
    
    async def run_diff():
        async with ConnectionPool(pg_config.connection_config(pg_url)) as pool:
            return [
                (table, await diff_table(pool, table.name, table.columns, table.catalog_schema))
                for table in pg_config.tables()
            ]
    
    for table, details in asyncio.run(run_diff()):
        if details.is_empty:
            console.print(f"[green]✓[/green] {table.qualified_name}: up to date")
            continue
        console.print(f"[yellow]~[/yellow] {table.qualified_name}")
        for col in details.add:
            console.print(f"    [green]+ {escape(str(col))}[/green]")
        for col in details.remove:
            console.print(f"    [red]- {escape(str(col))}[/red] (not declared, kept)")


@main.command()
@_config_option
@_pg_url_option
@click.pass_context
@handle_errors
def inspect(ctx, config: str, pg_url: Optional[str]):
    """Show row estimates, sizes and indexes of the declared tables.
    
    Tables that do not exist yet are listed as missing.
    """
    pg_config = _load_config(ctx, config)
    
    async def run_inspect():
        rows = []
        async with ConnectionPool(pg_config.connection_config(pg_url)) as pool:
            introspector = SchemaIntrospector(pool)
            for table in pg_config.tables():
                if not await introspector.table_exists(table.catalog_schema, table.name):
                    rows.append((table.qualified_name, "missing", "-", "-"))
                    continue
                indexes = await introspector.indexes(table.name)
                rows.append((
                    table.qualified_name,
                    await introspector.row_estimate(table.name),
                    await introspector.table_size(table.qualified_name),
                    ", ".join(str(i.get("indexname", i.get("error"))) for i in indexes),
                ))
        return rows
    
    rich_table = RichTable(title="Tables")
    rich_table.add_column("Table", style="cyan")
    rich_table.add_column("Rows (est.)", justify="right")
    rich_table.add_column("Size", justify="right")
    rich_table.add_column("Indexes")
    for row in asyncio.run(run_inspect()):
        rich_table.add_row(*row)
    console.print(rich_table)


def _display_tables(tables: List[Table]) -> None:
    """Display merged tables."""
    rich_table = RichTable(title="Tables")
    rich_table.add_column("Table", style="cyan")
    rich_table.add_column("Columns", justify="right")
    rich_table.add_column("Unique", justify="right")
    rich_table.add_column("Indexes", justify="right")
    
    for table in tables:
        rich_table.add_row(
            table.qualified_name,
            str(len(table.columns)),
            str(len(table.unique)),
            str(len(table.index)),
        )
    
    console.print(rich_table)


def _display_migration_result(result: MigrationResult) -> None:
    if result.status == MigrationStatus.FAILED:
        console.print(f"[red]✗[/red] {result.table}: {escape(str(result.error))}")
        return
    
    if result.status == MigrationStatus.DRY_RUN:
        console.print(f"[blue]DRY RUN[/blue] {result.table}")
        for stmt in result.statements:
            console.print(f"    {escape(stmt)}")
        return
    
    console.print(f"[green]✓[/green] {result.table}")
    for col in result.added:
        console.print(f"    added column {escape(str(col))}")
    for col in result.removed:
        console.print(f"    [yellow]column {col.name} is not declared (kept)[/yellow]")


if __name__ == "__main__":
    main()
