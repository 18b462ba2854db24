"""
db/query.py
-----------
Describes a parent/child LEFT JOIN and composes it into SQL.

Column identifiers are quoted through psycopg2.sql, so table and column
names never pass through string formatting unescaped.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from psycopg2 import sql


@dataclass(frozen=True)
class JoinQuery:
    """
    A one-to-many join: every parent row, plus matching child rows if any.

    The first entry of `parent_columns` and `child_columns` is the key.
    Child columns are selected as `<child_table>_<column>`.

    Attributes:
        parent_table: Table holding the parents (e.g. 'students').
        parent_columns: Parent columns, key first.
        child_table: Table holding the children (e.g. 'books').
        child_columns: Child columns, key first.
        foreign_key: Column of `child_table` referencing the parent key.
        order_by_parent_key: Sort rows by parent key ascending.
        parent_key: When set, restrict rows to this single parent.
    """
    parent_table: str
    parent_columns: tuple[str, ...]
    child_table: str
    child_columns: tuple[str, ...]
    foreign_key: str
    order_by_parent_key: bool = True
    parent_key: Optional[Any] = None

    @property
    def parent_key_column(self) -> str:
        return self.parent_columns[0]

    def child_alias(self, column: str) -> str:
        return f"{self.child_table}_{column}"

    def where_parent_key(self, key: Any) -> "JoinQuery":
        """
        Return a copy restricted to one parent, without ordering.

        Raises:
            ValueError: If `key` is None, which would leave the query unfiltered.
        """
        if key is None:
            raise ValueError(f"{self.parent_table}.{self.parent_key_column} filter cannot be None")
        return replace(self, parent_key=key, order_by_parent_key=False)

    def to_sql(self) -> sql.Composed:
        parent = sql.Identifier(self.parent_table)
        child = sql.Identifier(self.child_table)
        parent_key = sql.Identifier(self.parent_table, self.parent_key_column)

        selected = [sql.Identifier(self.parent_table, column) for column in self.parent_columns]
        selected += [
            sql.SQL("{} AS {}").format(
                sql.Identifier(self.child_table, column),
                sql.Identifier(self.child_alias(column)),
            )
            for column in self.child_columns
        ]

        parts = [
            sql.SQL("SELECT {} FROM {} LEFT JOIN {} ON {} = {}").format(
                sql.SQL(", ").join(selected),
                parent,
                child,
                sql.Identifier(self.child_table, self.foreign_key),
                parent_key,
            )
        ]
        if self.parent_key is not None:
            parts.append(sql.SQL("WHERE {} = %s").format(parent_key))
        if self.order_by_parent_key:
            parts.append(sql.SQL("ORDER BY {} ASC").format(parent_key))
        return sql.SQL(" ").join(parts)

    def params(self) -> tuple:
        return (self.parent_key,) if self.parent_key is not None else ()
