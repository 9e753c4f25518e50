"""
pgshape: Declarative PostgreSQL table synchronization.

pgshape turns declared table shapes into idempotent DDL, merges the tables
declared by several integrations, and adds missing columns to live tables.
"""

__version__ = "0.1.0"

from .config import PgShapeConfig, Integration
from .exceptions import (
    PgShapeError,
    ConfigurationError,
    DatabaseError,
    QueryError,
    StatementError,
)
from .schema import Column, Table, generate_ddl, diff, migrate, aggregate_ddl

__all__ = [
    "__version__",
    "PgShapeConfig",
    "Integration",
    "PgShapeError",
    "ConfigurationError",
    "DatabaseError",
    "QueryError",
    "StatementError",
    "Column",
    "Table",
    "generate_ddl",
    "diff",
    "migrate",
    "aggregate_ddl",
]
