"""Pydantic schemas: action inputs and HTTP responses."""
