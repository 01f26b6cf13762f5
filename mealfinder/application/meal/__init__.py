"""Meal detail."""
