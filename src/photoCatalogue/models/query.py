"""Query value objects used as result cache keys."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from .types import PermissionType, SourceType


class QueryType(IntEnum):
    ALL = 0
    YEAR = 1
    LOCATION = 2


class SortOrder(IntEnum):
    OLDEST_FIRST = 0
    YOUNGEST_FIRST = 1


class AccessorBuildFlags(IntFlag):
    """Accessors to build on a result set before it is returned."""

    NONE = 0
    DATE = 1 << 0
    LOCATION = 1 << 1


@dataclass(frozen=True, order=True)
class QueryParams:
    """Filter and ordering for a catalogue query.

    Equality and ordering are structural, so two independently built
    parameter objects hit the same cache entry.

    ``min_rating`` is carried for callers that already set it but no
    filtering consults it.
    """

    query_type: QueryType = QueryType.ALL
    sort_order: SortOrder = SortOrder.OLDEST_FIRST
    source_type_mask: int = 0
    item_type_mask: int = 0
    permission: PermissionType = PermissionType.PUBLIC
    min_rating: int = 0

    @staticmethod
    def make_source_type(want_slr: bool, want_drone: bool) -> int:
        mask = 0
        if want_slr:
            mask |= SourceType.SLR
        if want_drone:
            mask |= SourceType.DRONE
        return int(mask)


__all__ = ["AccessorBuildFlags", "QueryParams", "QueryType", "SortOrder"]
