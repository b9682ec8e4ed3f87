"""Domain layer: entities, store interfaces and services."""
