"""Schema helpers for the catalogue settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_EXCLUDE, DEFAULT_INCLUDE, RESULT_CACHE_SIZE

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "photoCatalogue/settings.schema.json",
    "type": "object",
    "required": ["schema", "include", "exclude"],
    "properties": {
        "schema": {"const": "photoCatalogue/settings@1"},
        "photos_base_path": {"type": ["string", "null"]},
        "include": {"type": "array", "items": {"type": "string"}, "minItems": 1},
        "exclude": {"type": "array", "items": {"type": "string"}},
        "result_cache_size": {"type": "integer", "minimum": 1},
        "parallel_discovery": {"type": "boolean"},
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "photoCatalogue/settings@1",
    "photos_base_path": None,
    "include": list(DEFAULT_INCLUDE),
    "exclude": list(DEFAULT_EXCLUDE),
    "result_cache_size": RESULT_CACHE_SIZE,
    "parallel_discovery": True,
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "photos_base_path" and value not in {None, ""}:
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
