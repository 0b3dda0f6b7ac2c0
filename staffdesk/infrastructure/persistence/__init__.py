"""Persistence layer: SQLAlchemy models, database manager and query helpers."""
