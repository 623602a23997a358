"""
Async engine and session management with SQLAlchemy
"""

from pathlib import Path
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from core.config import settings
import logging

logger = logging.getLogger(__name__)


def create_engine(database_url: Optional[str] = None, pool_size: Optional[int] = None) -> AsyncEngine:
    """
    Create the async engine for the output database.

    For file-backed SQLite URLs the parent directory of the database file
    is created first, since SQLite will not create it.
    """
    database_url = database_url or settings.DATABASE_URL
    url = make_url(database_url)
    engine_kwargs = {}

    in_memory = url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")
    if not in_memory:
        if url.get_backend_name() == "sqlite":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        # In-memory SQLite uses a static pool which takes no size
        engine_kwargs["pool_size"] = pool_size or settings.DB_POOL_SIZE

    logger.info(f"Creating database engine for {url.render_as_string(hide_password=True)}")

    return create_async_engine(
        database_url,
        echo=False,
        future=True,
        **engine_kwargs
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to the given engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )
