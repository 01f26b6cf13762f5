"""Meal catalog models and mapping."""
