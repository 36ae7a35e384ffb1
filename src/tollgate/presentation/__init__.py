"""Presentation layer: HTTP adapter and operator CLI."""
