"""Domain layer: models, mapping, errors and ports."""
