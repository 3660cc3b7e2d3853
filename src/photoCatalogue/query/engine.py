"""Filtering, ordering and caching of catalogue queries."""

from __future__ import annotations

from typing import Sequence

from ..cache.result_cache import ResultCache
from ..config import RESULT_CACHE_SIZE
from ..models.query import AccessorBuildFlags, QueryParams, SortOrder
from ..models.types import PermissionType, Photo
from ..utils.logging import get_logger
from .results import ResultSet

LOGGER = get_logger()


def matches_permission(clearance: PermissionType, photo: Photo) -> bool:
    """Return ``True`` if a caller cleared for *clearance* may see *photo*."""

    if photo.permission == PermissionType.PUBLIC:
        return True
    return photo.permission <= clearance


def matches_query(params: QueryParams, photo: Photo) -> bool:
    if params.source_type_mask and not params.source_type_mask & photo.source_type:
        return False
    if params.item_type_mask and not params.item_type_mask & photo.item_type:
        return False
    return matches_permission(params.permission, photo)


def perform_query(photos: Sequence[Photo], params: QueryParams) -> ResultSet:
    """Filter the chronologically sorted *photos* and apply the sort order."""

    selected = [photo for photo in photos if matches_query(params, photo)]
    if params.sort_order == SortOrder.YOUNGEST_FIRST:
        selected.reverse()
    return ResultSet(selected)


class QueryEngine:
    """Answers catalogue queries from a small cache of shared result sets."""

    def __init__(self, cache_size: int = RESULT_CACHE_SIZE) -> None:
        self._cache: ResultCache[QueryParams, ResultSet] = ResultCache(cache_size)

    @property
    def cache(self) -> ResultCache[QueryParams, ResultSet]:
        return self._cache

    def get_photo_results(
        self,
        photos: Sequence[Photo],
        params: QueryParams,
        build_flags: AccessorBuildFlags = AccessorBuildFlags.NONE,
    ) -> ResultSet:
        """Return the shared result set for *params*, querying on a cache miss.

        Accessors named in *build_flags* are built before the result set is
        returned.
        """

        results = self._cache.get(params)
        if results is None:
            LOGGER.debug("Result cache miss for %s", params)
            results = self._cache.put(params, perform_query(photos, params))
        results.ensure_accessors(build_flags)
        return results

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["QueryEngine", "matches_permission", "matches_query", "perform_query"]
