"""
Schema migration for declared tables.

Applies a table's DDL, then adds any declared columns the live table is
missing. Columns are never dropped or retyped. Statements run one at a
time with no enclosing transaction; every statement is guarded with
``if not exists`` so a partially applied migration can simply be re-run.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..database.connection import Connection
from ..exceptions import PgShapeError, QueryError, StatementError
from .ddl import add_column_sql, generate_ddl
from .differ import DiffDetails, diff
from .table import Column, Table


logger = logging.getLogger(__name__)


async def migrate(conn: Connection, table: Table) -> DiffDetails:
    """
    Bring the live table in line with its declaration.
    
    Args:
        conn: Connection or pool to execute against
        table: Desired table shape
    
    Returns:
        The diff computed after the DDL ran. ``remove`` is informational.
    
    Raises:
        StatementError: If a DDL or ALTER statement fails
        QueryError: If the live columns cannot be read
    """
    qualified = table.qualified_name
    
    for stmt in generate_ddl(table):
        logger.debug(f"Executing: {stmt}")
        try:
            await conn.execute(stmt)
        except Exception as e:
            raise StatementError(table=qualified, statement=stmt, cause=e) from e
    
    try:
        details = await diff(conn, table.name, table.columns, table.catalog_schema)
    except QueryError as e:
        raise QueryError(
            f"getting diff for {qualified}", details=e.details, cause=e.cause
        ) from e
    
    for col in details.add:
        stmt = add_column_sql(table, col.name, col.type)
        logger.debug(f"Executing: {stmt}")
        try:
            await conn.execute(stmt)
        except Exception as e:
            raise StatementError(
                table=qualified, statement=stmt, column=col.name, cause=e
            ) from e
        logger.info(f"Added column {col.name} to {qualified}")
    
    if details.remove:
        logger.warning(
            f"Table {qualified} has undeclared columns "
            f"{[col.name for col in details.remove]}; leaving them in place"
        )
    
    return details


class MigrationStatus(str, Enum):
    """Outcome of migrating one table."""
    
    SUCCESS = "success"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass
class MigrationResult:
    """Result of migrating a single table."""
    
    table: str
    status: MigrationStatus
    statements: List[str] = field(default_factory=list)
    added: List[Column] = field(default_factory=list)
    removed: List[Column] = field(default_factory=list)
    error: Optional[str] = None
    execution_time_ms: float = 0.0
    
    @property
    def succeeded(self) -> bool:
        return self.status != MigrationStatus.FAILED


class SchemaMigrator:
    """Migrates a sequence of tables over one connection, collecting results."""
    
    def __init__(self, conn: Connection, dry_run: bool = False):
        self.conn = conn
        self.dry_run = dry_run
    
    async def plan(self, table: Table) -> List[str]:
        """Statements ``migrate`` would run for this table, without running any."""
        details = await diff(self.conn, table.name, table.columns, table.catalog_schema)
        statements = generate_ddl(table)
        statements.extend(add_column_sql(table, col.name, col.type) for col in details.add)
        return statements
    
    async def migrate_table(self, table: Table) -> MigrationResult:
        start_time = time.time()
        result = MigrationResult(
            table=table.qualified_name, status=MigrationStatus.SUCCESS
        )
        
        try:
            if self.dry_run:
                result.statements = await self.plan(table)
                result.status = MigrationStatus.DRY_RUN
                logger.info(f"DRY RUN: {len(result.statements)} statements for {result.table}")
            else:
                details = await migrate(self.conn, table)
                result.statements = generate_ddl(table) + [
                    add_column_sql(table, col.name, col.type) for col in details.add
                ]
                result.added = details.add
                result.removed = details.remove
                logger.info(f"Migrated {result.table}")
        except PgShapeError as e:
            result.status = MigrationStatus.FAILED
            result.error = str(e)
            logger.error(f"Failed to migrate {result.table}: {e}")
        
        result.execution_time_ms = (time.time() - start_time) * 1000
        return result
    
    async def migrate_all(
        self, tables: Iterable[Table], stop_on_error: bool = True
    ) -> List[MigrationResult]:
        """Migrate tables in order."""
        results = []
        
        for table in tables:
            result = await self.migrate_table(table)
            results.append(result)
            
            if not result.succeeded and stop_on_error:
                logger.error(f"Stopping migration due to failure: {result.table}")
                break
        
        return results
    
    def get_summary(self, results: List[MigrationResult]) -> Dict[str, Any]:
        """Get summary of migration results."""
        return {
            "total_tables": len(results),
            "succeeded": sum(1 for r in results if r.succeeded),
            "failed": sum(1 for r in results if not r.succeeded),
            "columns_added": sum(len(r.added) for r in results),
            "total_execution_time_ms": sum(r.execution_time_ms for r in results),
            "failed_tables": [
                {"table": r.table, "error": r.error}
                for r in results if not r.succeeded
            ],
        }
