"""Immutable, shareable query results with lazily built accessors."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from ..models.query import AccessorBuildFlags
from ..models.types import Photo
from .date_accessor import DateAccessor
from .location_accessor import LocationAccessor

T = TypeVar("T")


class _BuildOnce(Generic[T]):
    """Write-once slot whose value is produced by the first reader.

    ``threading.Event`` is the published "built" flag: it is set only after
    the value is stored, and reading it synchronises with the setter, so a
    reader that sees it set also sees the finished value.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._value: Optional[T] = None
        self._built = threading.Event()
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        return self._built.is_set()

    def get(self) -> T:
        if not self._built.is_set():
            with self._lock:
                if not self._built.is_set():
                    self._value = self._factory()
                    self._built.set()
        return self._value  # type: ignore[return-value]


class ResultSet:
    """Photos matching one query, in query order.

    The photo sequence never changes after construction. The date and
    location accessors are each built at most once, on first request.
    """

    def __init__(self, photos: Iterable[Photo]) -> None:
        self._photos: Tuple[Photo, ...] = tuple(photos)
        self._date_accessor: _BuildOnce[DateAccessor] = _BuildOnce(
            lambda: DateAccessor.from_photos(self._photos)
        )
        self._location_accessor: _BuildOnce[LocationAccessor] = _BuildOnce(
            lambda: LocationAccessor.from_photos(self._photos)
        )

    @property
    def photos(self) -> Tuple[Photo, ...]:
        return self._photos

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[Photo]:
        return iter(self._photos)

    def __bool__(self) -> bool:
        return bool(self._photos)

    @property
    def date_accessor_built(self) -> bool:
        return self._date_accessor.built

    @property
    def location_accessor_built(self) -> bool:
        return self._location_accessor.built

    def date_accessor(self) -> DateAccessor:
        return self._date_accessor.get()

    def location_accessor(self) -> LocationAccessor:
        return self._location_accessor.get()

    def ensure_accessors(self, build_flags: AccessorBuildFlags) -> None:
        """Build every accessor requested in *build_flags*."""

        if build_flags & AccessorBuildFlags.DATE:
            self._date_accessor.get()
        if build_flags & AccessorBuildFlags.LOCATION:
            self._location_accessor.get()

    def __repr__(self) -> str:
        return (
            f"ResultSet(photos={len(self._photos)}, "
            f"date_accessor_built={self.date_accessor_built}, "
            f"location_accessor_built={self.location_accessor_built})"
        )


__all__ = ["ResultSet"]
