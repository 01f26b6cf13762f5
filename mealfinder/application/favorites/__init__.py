"""Favorites store."""
