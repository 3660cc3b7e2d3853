"""Custom exception hierarchy for photoCatalogue."""

from __future__ import annotations


class PhotoCatalogueError(Exception):
    """Base class for all custom errors raised by photoCatalogue."""


class DescriptorError(PhotoCatalogueError):
    """Raised when a descriptor file cannot be read at all."""


class CatalogueError(PhotoCatalogueError):
    """Base class for errors while building the photo catalogue."""


class CatalogueRootError(CatalogueError):
    """Raised when the catalogue root does not exist or is not a directory."""


class SettingsError(PhotoCatalogueError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "CatalogueError",
    "CatalogueRootError",
    "DescriptorError",
    "PhotoCatalogueError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
