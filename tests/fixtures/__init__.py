"""Reusable test helpers shared across test modules."""
