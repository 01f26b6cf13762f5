"""Favorites persistence port."""
