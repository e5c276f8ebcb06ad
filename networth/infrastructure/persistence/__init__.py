"""Persistence adapters (async SQLAlchemy)."""
