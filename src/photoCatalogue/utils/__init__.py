"""Utility helpers shared across photoCatalogue."""
