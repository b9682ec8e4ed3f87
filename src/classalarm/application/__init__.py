"""Application layer: the externally invoked operations."""
