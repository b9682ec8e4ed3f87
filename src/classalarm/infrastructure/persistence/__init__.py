"""Persistence layer: database manager, ORM models and store adapters."""
