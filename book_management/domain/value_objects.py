"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

from enum import Enum
from typing import Iterable, List


class BookStatus(str, Enum):
    """
    Publication status of a book.

    The only forbidden move is going back from PUBLISHED to UNPUBLISHED.
    """

    UNPUBLISHED = "unpublished"
    PUBLISHED = "published"

    def can_transition_to(self, requested: "BookStatus") -> bool:
        """Check whether a book in this status may be moved to `requested`."""
        return not (
            self is BookStatus.PUBLISHED and requested is BookStatus.UNPUBLISHED
        )


def unique_ids(ids: Iterable[int]) -> List[int]:
    """
    Collapse duplicate ids, keeping the first occurrence of each.

    Args:
        ids: Ids in caller order, possibly repeated

    Returns:
        The distinct ids in the order they first appeared
    """
    seen = set()
    result: List[int] = []
    for value in ids:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
