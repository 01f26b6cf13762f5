"""Discovery query and result models."""
