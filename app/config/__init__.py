"""Typed configuration models for workflow services."""

from app.config.publication import PublicationConfig

__all__ = [
    "PublicationConfig",
]
