"""Photo and representation models used by photoCatalogue."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, IntFlag
from typing import Optional, Tuple


class SourceType(IntFlag):
    """Capture device family, stored as a bit so query masks can test it."""

    UNKNOWN = 0
    SLR = 1 << 0
    PHONE = 1 << 1
    COMPACT = 1 << 2
    DRONE = 1 << 3

    @classmethod
    def from_descriptor(cls, value: str) -> "SourceType":
        # ``phone`` and ``compact`` are reserved names without a descriptor
        # spelling yet.
        return _SOURCE_TYPE_NAMES.get(value, cls.UNKNOWN)


class ItemType(IntFlag):
    UNKNOWN = 0
    STILL = 1 << 0
    MOVIE = 1 << 1
    PANORAMA = 1 << 2
    SPHERICAL_360 = 1 << 3
    TIMELAPSE = 1 << 4

    @classmethod
    def from_descriptor(cls, value: str) -> "ItemType":
        return _ITEM_TYPE_NAMES.get(value, cls.UNKNOWN)


class PermissionType(IntEnum):
    """Visibility level, ordered by increasing restriction."""

    PUBLIC = 0
    AUTHORISED_BASIC = 1
    AUTHORISED_ADVANCED = 2
    PRIVATE = 3

    @classmethod
    def from_descriptor(cls, value: str) -> "PermissionType":
        return _PERMISSION_NAMES.get(value, cls.PUBLIC)


_SOURCE_TYPE_NAMES = {"slr": SourceType.SLR, "drone": SourceType.DRONE}
_ITEM_TYPE_NAMES = {"still": ItemType.STILL}
_PERMISSION_NAMES = {
    "authBasic": PermissionType.AUTHORISED_BASIC,
    "authAdvanced": PermissionType.AUTHORISED_ADVANCED,
    "private": PermissionType.PRIVATE,
}


@dataclass(slots=True, frozen=True)
class Representation:
    """A single image file of a photo at one resolution."""

    relative_path: str
    width: int = 0
    height: int = 0
    aspect_ratio: float = field(init=False)

    def __post_init__(self) -> None:
        ratio = self.width / self.height if self.height else 0.0
        object.__setattr__(self, "aspect_ratio", ratio)

    @property
    def max_dimension(self) -> int:
        return max(self.width, self.height)

    @property
    def min_dimension(self) -> int:
        return min(self.width, self.height)


@dataclass(slots=True, frozen=True, eq=False)
class Photo:
    """An immutable catalogue entry.

    Photos compare and hash by identity: the same photo object is shared by
    the catalogue, every result set containing it and both accessors of each
    result set.
    """

    representations: Tuple[Representation, ...]
    time_taken: Optional[datetime] = None
    source_type: SourceType = SourceType.UNKNOWN
    item_type: ItemType = ItemType.UNKNOWN
    permission: PermissionType = PermissionType.PUBLIC
    geo_location_path: str = ""
    rating: int = 0

    def __post_init__(self) -> None:
        if not self.representations:
            raise ValueError("a photo needs at least its primary representation")

    @property
    def primary(self) -> Representation:
        return self.representations[0]

    @property
    def sort_key(self) -> Tuple[bool, datetime]:
        """Chronological key where undated photos sort before dated ones."""

        if self.time_taken is None:
            return (False, datetime.min)
        return (True, self.time_taken)

    def smallest_representation_min_dimension(self, min_value: int) -> Optional[Representation]:
        """Return the smallest representation whose larger side is at least *min_value*."""

        best: Optional[Representation] = None
        for representation in self.representations:
            size = representation.max_dimension
            if size < min_value:
                continue
            if best is None or size < best.max_dimension:
                best = representation
        return best

    def first_representation_min_dimension(
        self, min_value: int, return_largest_if_not_found: bool = False
    ) -> Optional[Representation]:
        """Return the first representation whose smaller side is at least *min_value*.

        When none qualifies and *return_largest_if_not_found* is set, the
        representation with the largest smaller side is returned instead,
        ignoring degenerate ones of a single pixel or less.
        """

        largest: Optional[Representation] = None
        for representation in self.representations:
            size = representation.min_dimension
            if size >= min_value:
                return representation
            if size > 1 and (largest is None or size > largest.min_dimension):
                largest = representation
        if return_largest_if_not_found:
            return largest
        return None


__all__ = ["ItemType", "PermissionType", "Photo", "Representation", "SourceType"]
