"""Chronological index over a result set."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..models.types import Photo


class DateAccessor:
    """Year and (year, month) buckets of the photos in a result set.

    Months are 0-based (January is ``0``). Photos without a timestamp are
    not indexed. Within each bucket photos keep the result set's order.
    """

    def __init__(self) -> None:
        self.year_items: Dict[int, Tuple[Photo, ...]] = {}
        self.year_month_items: Dict[Tuple[int, int], Tuple[Photo, ...]] = {}
        self.year_month_indices: Dict[int, Tuple[int, ...]] = {}

    @classmethod
    def from_photos(cls, photos: Iterable[Photo]) -> "DateAccessor":
        accessor = cls()
        accessor.build(photos)
        return accessor

    def build(self, photos: Iterable[Photo]) -> None:
        year_items: Dict[int, List[Photo]] = {}
        year_month_items: Dict[Tuple[int, int], List[Photo]] = {}
        year_month_indices: Dict[int, List[int]] = {}

        for photo in photos:
            taken = photo.time_taken
            if taken is None:
                continue
            year = taken.year
            month = taken.month - 1

            year_items.setdefault(year, []).append(photo)
            months = year_month_indices.setdefault(year, [])

            bucket = year_month_items.get((year, month))
            if bucket is None:
                year_month_items[(year, month)] = [photo]
                months.append(month)
            else:
                bucket.append(photo)

        self.year_items = {key: tuple(year_items[key]) for key in sorted(year_items)}
        self.year_month_items = {
            key: tuple(year_month_items[key]) for key in sorted(year_month_items)
        }
        self.year_month_indices = {
            key: tuple(year_month_indices[key]) for key in sorted(year_month_indices)
        }

    def years(self) -> List[int]:
        return list(self.year_month_indices)

    def months_for_year(self, year: int) -> Tuple[int, ...]:
        """Return the 0-based months of *year* in order of first appearance."""
        return self.year_month_indices.get(year, ())

    def photos_for_year(self, year: int) -> Tuple[Photo, ...]:
        return self.year_items.get(year, ())

    def photos_for_month_year(self, year: int, month: int) -> Tuple[Photo, ...]:
        return self.year_month_items.get((year, month), ())


__all__ = ["DateAccessor"]
