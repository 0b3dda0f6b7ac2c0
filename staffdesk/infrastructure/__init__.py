"""Infrastructure layer: adapters for the database, identity provider, cache and logging."""
