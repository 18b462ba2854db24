"""
models/entity.py
----------------
Generic shapes used when rebuilding a one-to-many relationship
from the rows of a single LEFT JOIN query.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class FlatRow:
    """
    One (parent, child) pair as produced by the join.

    Attributes:
        parent_key: Primary key of the parent row.
        parent_attributes: Remaining parent columns, keyed by column name.
        child_key: Primary key of the child, or None on a left-join miss.
        child_attributes: Remaining child columns; None whenever child_key is None.
    """
    parent_key: Any
    parent_attributes: dict
    child_key: Any = None
    child_attributes: Optional[dict] = None

    @classmethod
    def from_row(
        cls,
        row: Sequence[Any],
        parent_columns: Sequence[str],
        child_columns: Sequence[str],
    ) -> "FlatRow":
        """
        Split a raw database tuple into its parent and child halves.

        The first column of each half is its key; the rest become attributes.
        """
        width = len(parent_columns)
        parent_values = row[:width]
        child_values = row[width:width + len(child_columns)]

        child_key = child_values[0] if child_values else None
        child_attributes = None
        if child_key is not None:
            child_attributes = dict(zip(child_columns[1:], child_values[1:]))

        return cls(
            parent_key=parent_values[0],
            parent_attributes=dict(zip(parent_columns[1:], parent_values[1:])),
            child_key=child_key,
            child_attributes=child_attributes,
        )


@dataclass
class ChildEntity:
    """A child identified by `id`; attributes never take part in equality checks."""
    id: Any
    attributes: dict = field(default_factory=dict, compare=False)


@dataclass
class ParentEntity:
    """
    A parent and the distinct children found for it.

    Attributes:
        id: Parent primary key.
        attributes: Parent columns other than the key.
        children: Children in the order their keys were first seen.
    """
    id: Any
    attributes: dict = field(default_factory=dict)
    children: list[ChildEntity] = field(default_factory=list)
