"""Catalog metadata."""
