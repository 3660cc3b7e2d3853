"""In-memory photo catalogue built from descriptor files."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List, Mapping, Optional, Sequence, Tuple

from dateutil.parser import isoparse

from ..config import (
    BASIC_DATE_TIME_OF_DAY,
    DEFAULT_EXCLUDE,
    DEFAULT_INCLUDE,
    MAX_DIMENSION,
    MAX_REPRESENTATIONS,
    PRIMARY_REPRESENTATION,
    RESULT_CACHE_SIZE,
)
from ..errors import CatalogueRootError
from ..io.descriptor import DescriptorFile
from ..io.exif import read_image_meta
from ..io.scanner import iter_descriptor_paths
from ..models.query import AccessorBuildFlags, QueryParams
from ..models.types import ItemType, PermissionType, Photo, Representation, SourceType
from ..query.engine import QueryEngine
from ..query.results import ResultSet
from ..utils.logging import get_logger
from ..utils.pathutils import combine_paths, remove_path_prefix

if TYPE_CHECKING:
    from ..settings.manager import SettingsManager

LOGGER = get_logger()


@dataclass(slots=True)
class CatalogueOptions:
    """Behavioural switches for :class:`CatalogueBuilder`."""

    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    parallel_discovery: bool = True
    result_cache_size: int = RESULT_CACHE_SIZE

    @classmethod
    def from_settings(cls, settings: "SettingsManager") -> "CatalogueOptions":
        return cls(
            include=list(settings.get("include", DEFAULT_INCLUDE)),
            exclude=list(settings.get("exclude", DEFAULT_EXCLUDE)),
            parallel_discovery=bool(settings.get("parallel_discovery", True)),
            result_cache_size=int(settings.get("result_cache_size", RESULT_CACHE_SIZE)),
        )


class Catalogue:
    """Chronologically sorted photos plus the engine that queries them.

    The photo tuple is published once, fully sorted, and never changes.
    """

    def __init__(
        self,
        root: Path,
        photos: Sequence[Photo],
        query_engine: Optional[QueryEngine] = None,
    ) -> None:
        self.root = root
        self._photos: Tuple[Photo, ...] = tuple(photos)
        self.query_engine = query_engine or QueryEngine()

    @property
    def photos(self) -> Tuple[Photo, ...]:
        return self._photos

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[Photo]:
        return iter(self._photos)

    def query(
        self,
        params: Optional[QueryParams] = None,
        build_flags: AccessorBuildFlags = AccessorBuildFlags.NONE,
    ) -> ResultSet:
        return self.query_engine.get_photo_results(
            self._photos, params or QueryParams(), build_flags
        )

    def full_path(self, representation: Representation) -> Path:
        """Return the on-disk location of *representation*."""
        return self.root / representation.relative_path


def _parse_basic_date(value: str) -> Optional[datetime]:
    try:
        parsed = isoparse(value)
    except (ValueError, OverflowError):
        return None
    return datetime.combine(parsed.date(), BASIC_DATE_TIME_OF_DAY)


def _parse_dimensions(value: str) -> Optional[Tuple[int, int]]:
    width, separator, height = value.partition(",")
    if not separator:
        return None
    try:
        parsed = int(width.strip()), int(height.strip())
    except ValueError:
        return None
    if not all(0 <= side <= MAX_DIMENSION for side in parsed):
        return None
    return parsed


class CatalogueBuilder:
    """Turns the descriptor files below a root into a :class:`Catalogue`."""

    def __init__(self, root: Path, options: Optional[CatalogueOptions] = None) -> None:
        self._root = Path(root).expanduser().absolute()
        self._root_posix = self._root.as_posix()
        self._options = options or CatalogueOptions()
        self._photos: List[Photo] = []
        self.descriptor_count = 0

    @property
    def root(self) -> Path:
        return self._root

    def build(self) -> Catalogue:
        if not self._root.is_dir():
            raise CatalogueRootError(f"Catalogue root is not a directory: {self._root}")

        LOGGER.info("Looking for photos in %s", self._root)
        for descriptor_path in iter_descriptor_paths(
            self._root,
            self._options.include,
            self._options.exclude,
            parallel=self._options.parallel_discovery,
        ):
            self.add_descriptor(descriptor_path)

        photos = sorted(self._photos, key=lambda photo: photo.sort_key)
        LOGGER.info(
            "Loaded %d photos from %d descriptor files", len(photos), self.descriptor_count
        )
        return Catalogue(self._root, photos, QueryEngine(self._options.result_cache_size))

    def add_descriptor(self, path: Path) -> int:
        """Parse the descriptor at *path* and collect its photos.

        Returns the number of photos added.
        """

        self.descriptor_count += 1
        descriptor = DescriptorFile.load(path)
        added = 0
        for item in descriptor.iter_baked_items():
            photo = self.process_item(item, path.parent, source=path)
            if photo is not None:
                self._photos.append(photo)
                added += 1
        return added

    def _resolve_base_path(self, item: Mapping[str, str], descriptor_dir: Path) -> str:
        """Return the directory, relative to the root, images of *item* live in."""

        base = item.get("basePath")
        if base is None:
            return ""
        if base == ".":
            base = descriptor_dir.as_posix()
        return remove_path_prefix(base, self._root_posix)

    def process_item(
        self,
        item: Mapping[str, str],
        descriptor_dir: Path,
        source: Optional[Path] = None,
    ) -> Optional[Photo]:
        """Build the photo described by one baked *item*, or ``None`` to drop it."""

        if f"res-{PRIMARY_REPRESENTATION}-img" not in item:
            return None

        base_path = self._resolve_base_path(item, descriptor_dir)

        time_taken: Optional[datetime] = None
        date_value = item.get("date", "")
        if date_value:
            time_taken = _parse_basic_date(date_value)
            if time_taken is None:
                LOGGER.warning("Ignoring malformed date %r in %s", date_value, source)

        representations: List[Representation] = []
        for index in range(MAX_REPRESENTATIONS):
            res_key = f"res-{index}"
            # A missing resolution means the rest of the set is unreliable.
            if res_key not in item:
                break
            image_value = item.get(f"{res_key}-img", "")
            if not image_value:
                continue

            relative_path = combine_paths(base_path, image_value)
            full_path = self._root / relative_path

            meta = None
            if index == PRIMARY_REPRESENTATION:
                meta = read_image_meta(full_path)
                if meta["dt"] is not None:
                    time_taken = meta["dt"]

            dimensions = None
            dimension_value = item[res_key]
            if dimension_value:
                dimensions = _parse_dimensions(dimension_value)
                if dimensions is None:
                    LOGGER.warning(
                        "Ignoring malformed dimensions %r for %s in %s",
                        dimension_value,
                        relative_path,
                        source,
                    )

            if dimensions is not None:
                exists = full_path.is_file()
                width, height = dimensions
            else:
                if meta is None:
                    meta = read_image_meta(full_path, with_exif=False)
                exists = meta["w"] is not None
                width, height = (meta["w"], meta["h"]) if exists else (0, 0)

            if not exists and index == PRIMARY_REPRESENTATION:
                LOGGER.debug("Dropping photo: primary image %s is missing", full_path)
                return None

            representations.append(Representation(relative_path, width, height))

        if not representations:
            LOGGER.warning(
                "Dropping item %r in %s: no usable primary representation",
                item[f"res-{PRIMARY_REPRESENTATION}-img"],
                source,
            )
            return None

        return Photo(
            representations=tuple(representations),
            time_taken=time_taken,
            source_type=SourceType.from_descriptor(item.get("sourceType", "")),
            item_type=ItemType.from_descriptor(item.get("itemType", "")),
            permission=PermissionType.from_descriptor(item.get("permission", "")),
            geo_location_path=item.get("geoLocationPath", ""),
        )


def build_catalogue(root: Path, options: Optional[CatalogueOptions] = None) -> Catalogue:
    """Build the catalogue for every descriptor file below *root*."""

    return CatalogueBuilder(root, options).build()


__all__ = ["Catalogue", "CatalogueBuilder", "CatalogueOptions", "build_catalogue"]
