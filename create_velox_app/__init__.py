"""Scaffold new Velox app projects from bundled templates."""

__version__ = "0.1.0"
