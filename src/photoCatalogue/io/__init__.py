"""Readers for descriptor files and image metadata."""
