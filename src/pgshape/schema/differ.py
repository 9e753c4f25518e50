"""
Column-level diff between a declared table and the live catalog.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ..database.connection import Connection
from ..exceptions import QueryError
from .table import Column, DEFAULT_SCHEMA


logger = logging.getLogger(__name__)


COLUMNS_QUERY = """
    select column_name, data_type
    from information_schema.columns
    where table_schema = $1
    and table_name = $2
"""


@dataclass
class DiffDetails:
    """Columns to add (declared, not live) and to remove (live, not declared)."""
    
    add: List[Column] = field(default_factory=list)
    remove: List[Column] = field(default_factory=list)
    
    @property
    def is_empty(self) -> bool:
        return not self.add and not self.remove


async def live_columns(conn: Connection, schema: str, table_name: str) -> List[Column]:
    """
    Read a table's live columns from ``information_schema``.
    
    A missing table yields an empty list.
    
    Raises:
        QueryError: If the query or row decoding fails
    """
    try:
        rows = await conn.fetch(COLUMNS_QUERY, schema, table_name)
        return [Column(name=row["column_name"], type=row["data_type"]) for row in rows]
    except Exception as e:
        logger.error(f"Error getting columns for {schema}.{table_name}: {e}")
        raise QueryError(
            "querying for table info",
            details={"schema": schema, "table": table_name},
            cause=e,
        ) from e


def compare_columns(desired: Iterable[Column], live: Iterable[Column]) -> DiffDetails:
    """Compare two column sets by name; types are not considered."""
    desired = list(desired)
    live = list(live)
    live_names = {col.name for col in live}
    desired_names = {col.name for col in desired}
    
    return DiffDetails(
        add=[col for col in desired if col.name not in live_names],
        remove=[col for col in live if col.name not in desired_names],
    )


async def diff(
    conn: Connection,
    table_name: str,
    columns: Iterable[Column],
    schema: str = "",
) -> DiffDetails:
    """
    Diff declared columns against the live table.
    
    Args:
        conn: Connection or pool to query
        table_name: Bare table name
        columns: Declared columns, in declared order
        schema: Schema name, empty means ``public``
    
    Returns:
        DiffDetails with ``add`` in declared order
    """
    schema = schema or DEFAULT_SCHEMA
    live = await live_columns(conn, schema, table_name)
    return compare_columns(columns, live)
