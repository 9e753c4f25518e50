"""
Merging of integration tables into one non-duplicated DDL set.

Integrations that declare the same qualified table (schema + name) share
it: their columns are unioned by name in first-seen order. Same-named
tables in different schemas stay separate.
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Set

from .ddl import generate_ddl
from .table import Column, Table

if TYPE_CHECKING:
    from ..config import Integration


logger = logging.getLogger(__name__)


class _TableAccumulator:
    """Mutable merge state for one qualified table."""
    
    def __init__(self, table: Table):
        self.base = table
        self.columns: List[Column] = []
        self.seen: Set[str] = set()
        self.unique: List[tuple] = []
        self.index: List[tuple] = []
        self.add(table)
    
    def add(self, table: Table) -> None:
        for col in table.columns:
            if col.name in self.seen:
                continue
            self.seen.add(col.name)
            self.columns.append(col)
        self.unique.extend(table.unique)
        self.index.extend(table.index)
    
    def build(self) -> Table:
        return self.base.model_copy(
            update={
                "columns": tuple(self.columns),
                "unique": tuple(self.unique),
                "index": tuple(self.index),
            }
        )


def merge_tables(integrations: Iterable["Integration"]) -> List[Table]:
    """
    Merge the integrations' tables by qualified name.
    
    The first integration declaring a qualified name fixes its name, schema
    and ``disable_unique``. Later ones append unseen columns and contribute
    their unique/index groups as-is, without de-duplication.
    
    Returns:
        Merged tables in the order their qualified names were first seen
    """
    merged: Dict[str, _TableAccumulator] = {}
    
    for integration in integrations:
        table = integration.table
        key = table.qualified_name
        if key in merged:
            logger.debug(f"Merging table {key} from integration {integration.name}")
            merged[key].add(table)
        else:
            merged[key] = _TableAccumulator(table)
    
    return [acc.build() for acc in merged.values()]


def aggregate_ddl(integrations: Iterable["Integration"]) -> List[str]:
    """DDL for every merged table, concatenated in first-seen order."""
    statements = []
    for table in merge_tables(integrations):
        statements.extend(generate_ddl(table))
    return statements
