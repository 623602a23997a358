"""
Script to run the data dump pipeline end to end
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.exceptions import PipelineError
from core.logging import setup_logging
from ingestion.runner import process_data_dump

logger = logging.getLogger(__name__)


async def run_etl() -> int:
    """Run the pipeline, returns the process exit code"""
    try:
        summary = await process_data_dump()
    except PipelineError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    for load in summary.loads:
        logger.info(
            f"{load.table}: Loaded={load.rows_loaded}, Batches={load.batches_inserted}"
        )
    return 0


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    sys.exit(asyncio.run(run_etl()))
