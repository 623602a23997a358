# ============================================================================
# File: ingestion/runner.py
# Description: End-to-end orchestrator for the data dump pipeline
# ============================================================================
"""
Dump pipeline runner - download, extract, set up tables, load.

Stages run strictly in order and the first failure aborts the run. The
database engine is disposed on every exit path once it has been created.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import httpx
from core.config import Settings, settings
from core.database import create_engine, create_session_factory
from ingestion.extractors.archive import extract_tar_gz
from ingestion.extractors.download import download_file
from ingestion.loaders.batch_loader import BatchLoader
from ingestion.schema import setup_tables
from models import Customer, Organization
from schemas.results import PipelineSummary
import logging

logger = logging.getLogger(__name__)


class DumpPipelineRunner:
    """
    Dump pipeline orchestrator

    Responsibilities:
    - Fetch the archive and unpack it
    - Create the output tables when missing
    - Load each CSV source, one after the other
    - Release the database engine however the run ends
    """

    def __init__(self, config: Settings = settings, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.client = client

    def sources(self) -> List[Tuple[Path, type]]:
        """CSV files to load, in load order, with their target models"""
        extract_path = Path(self.config.EXTRACT_PATH)
        return [
            (extract_path / self.config.ORGANIZATIONS_CSV, Organization),
            (extract_path / self.config.CUSTOMERS_CSV, Customer),
        ]

    async def run(self) -> PipelineSummary:
        """
        Run the full pipeline.

        Returns:
            PipelineSummary with created tables and per-source load results

        Raises:
            NetworkError, LocalIOError: Download failed
            ExtractionError: Archive could not be unpacked
            StorageError: Table setup or a batch insert failed
            ParseError: A CSV row was malformed
        """
        summary = PipelineSummary()

        # --------------------------------------------------
        # PHASE 1: DOWNLOAD
        # --------------------------------------------------
        await download_file(
            self.config.DUMP_URL,
            self.config.DOWNLOAD_PATH,
            client=self.client,
            timeout=self.config.HTTP_TIMEOUT
        )

        # --------------------------------------------------
        # PHASE 2: EXTRACT
        # --------------------------------------------------
        await extract_tar_gz(self.config.DOWNLOAD_PATH, self.config.EXTRACT_PATH)

        # --------------------------------------------------
        # PHASE 3: SCHEMA + LOAD
        # --------------------------------------------------
        engine = create_engine(self.config.DATABASE_URL, self.config.DB_POOL_SIZE)
        try:
            summary.tables_created = await setup_tables(engine, [model for _, model in self.sources()])

            session_factory = create_session_factory(engine)
            for csv_path, model in self.sources():
                loader = BatchLoader(session_factory, model, self.config.BATCH_SIZE)
                summary.loads.append(await loader.load_csv(csv_path))

        finally:
            await engine.dispose()
            logger.info("Database engine disposed")

        logger.info(
            f"Pipeline completed: {summary.total_rows} rows loaded "
            f"into {len(summary.loads)} tables"
        )
        return summary


async def process_data_dump() -> PipelineSummary:
    """Download the configured dump and load it into the configured database"""
    return await DumpPipelineRunner().run()
