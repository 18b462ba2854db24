"""
mapping/selector.py
-------------------
Point lookups on top of the flattener.
"""

from typing import Iterable, Optional

from mapping.flattener import flatten
from models.entity import FlatRow, ParentEntity
from utils.exceptions import AmbiguousResultError


def select_one(
    rows: Iterable[FlatRow], context: str = "single result lookup"
) -> Optional[ParentEntity]:
    """
    Flatten `rows` and return the only parent they describe.

    Many rows for the same parent are fine; only distinct parent keys count.

    Args:
        rows: Flat rows of a query keyed by a unique identifier.
        context: Describes the lookup in the error message.

    Returns:
        The parent entity, or None when no rows came back.

    Raises:
        AmbiguousResultError: If more than one distinct parent was found.
    """
    parents = flatten(rows)
    if not parents:
        return None
    if len(parents) > 1:
        raise AmbiguousResultError(len(parents), context)
    return parents[0]
