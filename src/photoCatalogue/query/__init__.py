"""Query engine, result sets and their date/location accessors."""

from .date_accessor import DateAccessor
from .engine import QueryEngine, matches_permission, perform_query
from .location_accessor import (
    LocationAccessor,
    decode_location_path,
    encode_location_path,
)
from .results import ResultSet

__all__ = [
    "DateAccessor",
    "LocationAccessor",
    "QueryEngine",
    "ResultSet",
    "decode_location_path",
    "encode_location_path",
    "matches_permission",
    "perform_query",
]
