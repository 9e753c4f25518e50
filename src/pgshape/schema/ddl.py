"""
DDL generation for declared tables.

Turns a ``Table`` into the ordered, idempotent statements that create its
schema, the table itself and its unique/plain indexes.
"""

from typing import List

from .quoting import quote, quote_all
from .table import Table


UNIQUE_INDEX_PREFIX = "u_"
INDEX_PREFIX = "shovel_"


def create_schema_sql(schema: str) -> str:
    return f"create schema if not exists {schema}"


def create_table_sql(table: Table) -> str:
    columns = ", ".join(f"{quote(col.name)} {col.type}" for col in table.columns)
    return f"create table if not exists {table.qualified_name}({columns})"


def unique_index_name(table: Table) -> str:
    # Uses the bare table name, so same-named tables in different schemas
    # share one unique index name.
    return f"{UNIQUE_INDEX_PREFIX}{table.name}"


def index_name(columns) -> str:
    """Build a plain index name from its column group."""
    return INDEX_PREFIX + "_".join(col.replace(" ", "_") for col in columns)


def create_unique_index_sql(table: Table, columns) -> str:
    return (
        f"create unique index if not exists {unique_index_name(table)} "
        f"on {table.qualified_name} ({quote_all(columns)})"
    )


def create_index_sql(table: Table, columns) -> str:
    return (
        f"create index if not exists {index_name(columns)} "
        f"on {table.qualified_name} ({quote_all(columns)})"
    )


def add_column_sql(table: Table, name: str, column_type: str) -> str:
    return (
        f"alter table {table.qualified_name} "
        f"add column if not exists {quote(name)} {column_type}"
    )


def generate_ddl(table: Table) -> List[str]:
    """
    Generate the DDL statements for a table.

    A table without columns produces no statements. Otherwise the result is,
    in order: the schema creation (only when a schema is set), one table
    creation with columns in declared order, one unique index per unique
    group and one plain index per index group.

    Args:
        table: Desired table shape

    Returns:
        Ordered list of SQL statements
    """
    if not table.columns:
        return []

    statements = []
    if table.schema_name:
        statements.append(create_schema_sql(table.schema_name))

    statements.append(create_table_sql(table))

    for columns in table.unique:
        statements.append(create_unique_index_sql(table, columns))

    for columns in table.index:
        statements.append(create_index_sql(table, columns))

    return statements
