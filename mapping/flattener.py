"""
mapping/flattener.py
--------------------
Rebuilds parent entities and their children from a flat join result.

Rows do not have to be grouped by parent. Each parent is created once,
at the position where its key first appears, and each child is attached
once per parent, at the position where its key first appears among that
parent's rows. Memory grows with the number of distinct keys, not rows.
"""

from typing import Any, Iterable

from models.entity import ChildEntity, FlatRow, ParentEntity


def flatten(rows: Iterable[FlatRow]) -> list[ParentEntity]:
    """
    Consume `rows` once and return the reconstructed parents.

    The first row seen for a parent or child key supplies its attributes;
    later rows with the same key never overwrite them.

    Args:
        rows: Flat rows in stream order. May be a live cursor.

    Returns:
        Parents in order of first appearance. Empty when `rows` is empty.
    """
    parents: list[ParentEntity] = []
    positions: dict[Any, int] = {}
    seen_children: list[set] = []

    for row in rows:
        index = positions.get(row.parent_key)
        if index is None:
            index = len(parents)
            positions[row.parent_key] = index
            parents.append(ParentEntity(id=row.parent_key, attributes=dict(row.parent_attributes)))
            seen_children.append(set())

        if row.child_key is None:
            continue

        seen = seen_children[index]
        if row.child_key in seen:
            continue

        seen.add(row.child_key)
        parents[index].children.append(
            ChildEntity(id=row.child_key, attributes=dict(row.child_attributes or {}))
        )

    return parents
