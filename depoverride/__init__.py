"""Dependency version overrides for build models."""

__version__ = "0.1.0"
