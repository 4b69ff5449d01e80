"""Storage adapters over the async SQLAlchemy session factory."""

from app.repositories.resource_repository import ResourceRepository

__all__ = ["ResourceRepository"]
