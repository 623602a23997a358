import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import create_engine
from core.logging import setup_logging
from ingestion.schema import setup_tables

logger = logging.getLogger(__name__)


async def init_database():
    logger.info("Connecting to database...")
    engine = create_engine(settings.DATABASE_URL)

    try:
        created = await setup_tables(engine)
    finally:
        await engine.dispose()

    if created:
        logger.info(f"Tables created: {', '.join(created)}")
    else:
        logger.info("All tables already exist.")


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(init_database())
