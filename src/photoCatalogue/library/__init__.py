"""Catalogue construction from descriptor trees."""

from .catalogue import Catalogue, CatalogueBuilder, CatalogueOptions, build_catalogue

__all__ = ["Catalogue", "CatalogueBuilder", "CatalogueOptions", "build_catalogue"]
