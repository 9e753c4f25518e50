"""
Exception classes for pgshape.
"""

from typing import Any, Dict, Optional


class PgShapeError(Exception):
    """Base exception for all pgshape errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            result += f" [{details_str}]"
        if self.cause:
            result += f" (caused by: {self.cause})"
        return result


class ConfigurationError(PgShapeError):
    """Raised when there's an error in configuration."""

    pass


class DatabaseError(PgShapeError):
    """Raised when there's an error with database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when there's an error establishing or maintaining database connections."""

    pass


class DatabaseConfigurationError(DatabaseError):
    """Raised when there's an error in database configuration."""

    pass


class SchemaError(DatabaseError):
    """Raised when there's an error with database schema operations."""

    pass


class QueryError(SchemaError):
    """Raised when a catalog introspection query or its row scan fails."""

    pass


class StatementError(SchemaError):
    """Raised when a DDL or ALTER statement fails against the database."""

    def __init__(
        self,
        table: str,
        statement: str,
        column: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        if column:
            message = f"adding column {table}/{column}"
        else:
            message = f'table "{table}" stmt "{statement}"'
        super().__init__(message, cause=cause)
        self.table = table
        self.statement = statement
        self.column = column
