"""Presentation layer: HTTP routers over the application actions."""
