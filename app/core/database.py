"""Database configuration and session management.

This module provides SQLAlchemy 2.0 async engine and session management.
It includes the Base class for all ORM models and the SessionFactory type
accepted by repositories.

The engine is created lazily on first use so that importing models
(e.g. from Alembic or unit tests) does not open a connection pool.
"""

import re
from collections.abc import Callable
from typing import ClassVar

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, declared_attr

from app.core.config import get_config
from app.core.logging import get_logger

logger = get_logger(__name__)

# ============================================
# Naming Convention
# ============================================
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ============================================
# Base Model
# ============================================


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Provides common functionality for all models including:
    - Consistent table naming (snake_case)
    - Metadata with naming conventions
    - __repr__ implementation

    Example:
        >>> class Reviewer(Base):
        ...     __tablename__ = "reviewers"
        ...     id: Mapped[int] = mapped_column(primary_key=True)
        ...     name: Mapped[str]
    """

    metadata: ClassVar[MetaData] = metadata

    @declared_attr.directive
    @classmethod
    def __tablename__(cls) -> str:
        """Generate table name from class name.

        Converts CamelCase to snake_case automatically.

        Returns:
            Snake case table name
        """
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()

    def __repr__(self) -> str:
        """String representation of model instance.

        Returns:
            String representation showing class and loaded columns
        """
        columns = ", ".join(
            f"{k}={v!r}"
            for k, v in self.__dict__.items()
            if not k.startswith("_") and k != "metadata"
        )
        return f"{self.__class__.__name__}({columns})"


# ============================================
# Engine and Session
# ============================================

# Anything called with no arguments that opens an AsyncSession context
SessionFactory = Callable[[], AsyncSession]

_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get the process-wide async engine, creating it on first call.

    Returns:
        Shared AsyncEngine
    """
    global _engine
    if _engine is None:
        config = get_config()
        _engine = create_async_engine(
            str(config.database_url),
            echo=config.database_echo,
            pool_size=config.database_pool_size,
            max_overflow=config.database_max_overflow,
            pool_pre_ping=True,  # Verify connections before using
            pool_recycle=3600,  # Recycle connections after 1 hour
        )
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared session factory bound to the process engine.

    Returns:
        async_sessionmaker producing AsyncSession instances
    """
    global _session_maker
    if _session_maker is None:
        _session_maker = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _session_maker


async def close_db() -> None:
    """Close database connections.

    Call this when shutting down the application.
    """
    global _engine, _session_maker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_maker = None
    logger.info("Database connections closed")

