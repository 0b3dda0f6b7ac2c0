"""Application layer: actions and the DTOs they return."""
