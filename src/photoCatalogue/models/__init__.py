"""Data models used by photoCatalogue."""

from .query import AccessorBuildFlags, QueryParams, QueryType, SortOrder
from .types import ItemType, PermissionType, Photo, Representation, SourceType

__all__ = [
    "AccessorBuildFlags",
    "ItemType",
    "PermissionType",
    "Photo",
    "QueryParams",
    "QueryType",
    "Representation",
    "SortOrder",
    "SourceType",
]
