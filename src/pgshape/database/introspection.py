"""
Database catalog introspection for pgshape.

Table existence checks plus display helpers (indexes, row estimates,
relation sizes). The display helpers report failures as values and never
raise; they only feed status output.
"""

import logging
from typing import Any, Dict, List

from .connection import Connection
from ..exceptions import QueryError


logger = logging.getLogger(__name__)


TABLE_EXISTS_QUERY = """
    select exists (
        select 1 from information_schema.tables
        where table_schema = $1 and table_name = $2
    )
"""

INDEXES_QUERY = """
    select indexname, indexdef
    from pg_indexes
    where tablename = $1
"""

ROW_ESTIMATE_QUERY = """
    select trim(to_char(reltuples, '999,999,999,999'))
    from pg_class
    where relname = $1
"""

TABLE_SIZE_QUERY = "select pg_size_pretty(pg_total_relation_size($1))"

PENDING = "pending"
NO_ROWS = "no rows in result set"


class SchemaIntrospector:
    """Catalog introspection over a single connection."""
    
    def __init__(self, conn: Connection):
        self.conn = conn
    
    async def table_exists(self, schema: str, table: str) -> bool:
        """Check if a table exists."""
        try:
            result = await self.conn.fetchval(TABLE_EXISTS_QUERY, schema, table)
            return bool(result)
        except Exception as e:
            logger.error(f"Error checking table existence for {schema}.{table}: {e}")
            raise QueryError(
                "checking table existence",
                details={"schema": schema, "table": table},
                cause=e,
            ) from e
    
    async def indexes(self, table: str) -> List[Dict[str, Any]]:
        """List a table's indexes, or a single ``{"error": ...}`` entry on failure."""
        try:
            rows = await self.conn.fetch(INDEXES_QUERY, table)
            return [dict(row) for row in rows]
        except Exception as e:
            logger.warning(f"Could not get indexes for {table}: {e}")
            return [{"error": str(e)}]
    
    async def row_estimate(self, table: str) -> str:
        """Planner row estimate for a table, formatted for display."""
        try:
            res = await self.conn.fetchval(ROW_ESTIMATE_QUERY, table)
        except Exception as e:
            logger.warning(f"Could not estimate rows for {table}: {e}")
            return str(e)
        
        if res is None:
            logger.warning(f"Could not estimate rows for {table}: {NO_ROWS}")
            return NO_ROWS
        # No statistics gathered yet
        if res == "0" or res.startswith("-"):
            return PENDING
        return res
    
    async def table_size(self, table: str) -> str:
        """Total on-disk size of a table including indexes and toast."""
        try:
            res = await self.conn.fetchval(TABLE_SIZE_QUERY, table)
        except Exception as e:
            logger.warning(f"Could not get size for {table}: {e}")
            return str(e)
        return str(res)
