"""
Schema management package for pgshape.

This package provides:
- Declarative table models and identifier quoting
- Idempotent DDL generation
- Column diffing against the live catalog
- Additive migrations (create, then add missing columns)
- Merging of tables declared by several integrations
"""

from .table import Column, Table
from .quoting import quote, RESERVED_WORDS
from .ddl import generate_ddl
from .differ import DiffDetails, diff
from .migrator import migrate, SchemaMigrator, MigrationResult, MigrationStatus
from .aggregator import merge_tables, aggregate_ddl

__all__ = [
    "Column",
    "Table",
    "quote",
    "RESERVED_WORDS",
    "generate_ddl",
    "DiffDetails",
    "diff",
    "migrate",
    "SchemaMigrator",
    "MigrationResult",
    "MigrationStatus",
    "merge_tables",
    "aggregate_ddl",
]
