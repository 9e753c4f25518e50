"""
Database integration package for pgshape.

This package provides:
- Async PostgreSQL connection pooling
- Catalog introspection (table existence)
- Display helpers for indexes, row estimates and table sizes
"""

from .connection import ConnectionConfig, ConnectionPool, Connection
from .introspection import SchemaIntrospector

__all__ = [
    "ConnectionConfig",
    "ConnectionPool",
    "Connection",
    "SchemaIntrospector",
]
