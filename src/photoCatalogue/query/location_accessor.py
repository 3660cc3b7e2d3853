"""Hierarchical location index over a result set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import LOCATION_PATH_SEPARATOR
from ..models.types import Photo


def split_location_path(location_path: str) -> List[str]:
    """Return the trimmed, non-empty components of *location_path*."""

    components = (part.strip() for part in location_path.strip().split(LOCATION_PATH_SEPARATOR))
    return [part for part in components if part]


def encode_location_path(location_path: str) -> str:
    """Encode a location path for use as a single query-string value."""

    return location_path.replace("%", "%25").replace("/", "%2F").replace("+", "%2B").replace(" ", "+")


def decode_location_path(encoded: str) -> str:
    """Reverse :func:`encode_location_path`."""

    return (
        encoded.replace("+", " ")
        .replace("%2B", "+")
        .replace("%2F", "/")
        .replace("%25", "%")
    )


@dataclass(slots=True)
class LocationNode:
    name: str
    sub_location_lookup: Dict[str, int] = field(default_factory=dict)
    photos: List[Photo] = field(default_factory=list)


class LocationAccessor:
    """Prefix tree of ``/``-separated ``geo_location_path`` values.

    Nodes live in one flat list and refer to their children by index. A
    photo is recorded on every node along its path, so the node for
    ``Europe`` also holds the photos of ``Europe/France/Paris``.
    """

    def __init__(self) -> None:
        self.nodes: List[LocationNode] = []
        self.location_lookup: Dict[str, int] = {}

    @classmethod
    def from_photos(cls, photos: Iterable[Photo]) -> "LocationAccessor":
        accessor = cls()
        accessor.build(photos)
        return accessor

    def _child_index(self, lookup: Dict[str, int], name: str) -> int:
        index = lookup.get(name)
        if index is None:
            index = len(self.nodes)
            self.nodes.append(LocationNode(name))
            lookup[name] = index
        return index

    def build(self, photos: Iterable[Photo]) -> None:
        for photo in photos:
            components = split_location_path(photo.geo_location_path)
            if not components:
                continue

            lookup = self.location_lookup
            for component in components:
                index = self._child_index(lookup, component)
                node = self.nodes[index]
                node.photos.append(photo)
                lookup = node.sub_location_lookup

    def _find_node(self, components: List[str]) -> Optional[LocationNode]:
        node: Optional[LocationNode] = None
        lookup = self.location_lookup
        for component in components:
            index = lookup.get(component)
            if index is None:
                return None
            node = self.nodes[index]
            lookup = node.sub_location_lookup
        return node

    def photos_for_location(self, location_path: str) -> Optional[Tuple[Photo, ...]]:
        """Return photos at or below *location_path*.

        ``None`` is returned for an empty path; unknown paths give an empty
        tuple.
        """

        components = split_location_path(location_path)
        if not components:
            return None
        node = self._find_node(components)
        if node is None:
            return ()
        return tuple(node.photos)

    def sub_locations(self, location_path: str = "") -> List[str]:
        """Return the names directly below *location_path* in lexicographic order.

        An empty path lists the top-level locations.
        """

        components = split_location_path(location_path)
        if not components:
            return sorted(self.location_lookup)
        node = self._find_node(components)
        if node is None:
            return []
        return sorted(node.sub_location_lookup)


__all__ = [
    "LocationAccessor",
    "LocationNode",
    "decode_location_path",
    "encode_location_path",
    "split_location_path",
]
