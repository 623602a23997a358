"""
Idempotent creation of the output tables
"""

from typing import List, Sequence

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from core.exceptions import StorageError
from models import Customer, Organization
import logging

logger = logging.getLogger(__name__)

DEFAULT_MODELS = (Organization, Customer)


async def setup_tables(engine: AsyncEngine, models: Sequence[type] = DEFAULT_MODELS) -> List[str]:
    """
    Create each model's table unless it already exists.

    Existence is checked before each creation. The check and the create are
    not atomic with each other, which is fine while this pipeline is the only
    writer.

    Returns:
        Names of the tables created by this call (empty when all existed)

    Raises:
        StorageError: Inspection or CREATE TABLE failed
    """
    created = []

    for model in models:
        table = model.__table__

        try:
            async with engine.begin() as conn:
                exists = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).has_table(table.name)
                )
                if exists:
                    logger.info(f"Table {table.name} already exists")
                    continue

                await conn.run_sync(table.create)

        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to set up table {table.name}",
                context={"table_name": table.name, "operation": "CREATE TABLE"},
                original_exception=e
            )

        logger.info(f"Created table {table.name}")
        created.append(table.name)

    return created
