"""
Declarative table model for pgshape.

A ``Table`` describes the desired shape of one relation: its (optional)
schema, ordered columns and unique/plain index groups. Instances are
frozen once loaded from configuration.
"""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SCHEMA = "public"


class Column(BaseModel):
    """A single column: its name and a raw SQL type literal."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name")
    type: str = Field(..., description="SQL type, passed through verbatim")

    def __str__(self) -> str:
        return f"{self.name} {self.type}"


class Table(BaseModel):
    """Desired table shape."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Table name")
    schema_name: str = Field(
        "", alias="schema", description="Schema name, empty means the default schema"
    )
    columns: Tuple[Column, ...] = Field(default=(), description="Ordered columns")
    disable_unique: bool = Field(False, description="Disable the integration's unique constraint")
    unique: Tuple[Tuple[str, ...], ...] = Field(
        default=(), description="Column groups, each becoming a unique index"
    )
    index: Tuple[Tuple[str, ...], ...] = Field(
        default=(), description="Column groups, each becoming a plain index"
    )

    @property
    def qualified_name(self) -> str:
        """Table name with schema prefix when a schema is set."""
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name

    @property
    def catalog_schema(self) -> str:
        """Schema used when looking the table up in the catalog."""
        return self.schema_name or DEFAULT_SCHEMA

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]
