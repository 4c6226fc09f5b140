"""Domain layer: value objects, errors and pure parsers."""
