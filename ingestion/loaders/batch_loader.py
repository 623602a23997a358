"""
Streaming batch loader: CSV records into a table, one bulk insert per batch
"""

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from core.config import settings
from core.exceptions import StorageError
from ingestion.extractors.csv_reader import iter_csv_records
from schemas.results import LoadSummary
import logging

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _fill_batch(
    source: Iterator[Record],
    batch: List[Record],
    capacity: int,
    check: Optional[Callable[[Record], None]] = None
) -> bool:
    """
    Pull records from ``source`` until ``batch`` holds ``capacity`` of them.

    ``check`` sees each record before it is buffered and may raise.

    Returns True once the source is exhausted.
    """
    while len(batch) < capacity:
        try:
            record = next(source)
        except StopIteration:
            return True
        if check is not None:
            check(record)
        batch.append(record)
    return False


class BatchLoader:
    """
    Load a stream of records into one table in fixed-size batches.

    Records accumulate in memory until ``batch_size`` of them are held.
    Reading then stops, the batch is bulk-inserted in a single transaction,
    the accumulator is cleared, and only then is the next record read.
    A final short batch is inserted when the source runs out.

    Ensures:
    - At most ``batch_size`` records held in memory
    - No source read while an insert is in flight
    - One insert per batch, committed or rolled back as a unit

    Batches committed before a failure stay in the table: a failed load
    is not rolled back as a whole.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        model: type,
        batch_size: Optional[int] = None
    ):
        batch_size = settings.BATCH_SIZE if batch_size is None else batch_size
        if not isinstance(batch_size, int) or batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")

        self.session_factory = session_factory
        self.model = model
        self.table_name = model.__tablename__
        self.batch_size = batch_size
        self.columns = frozenset(model.__mapper__.attrs.keys())

    def check_columns(self, record: Record) -> None:
        """
        Reject a record carrying keys the model does not map.

        A bulk insert silently drops such keys, so a renamed or misspelled
        CSV header would otherwise load as NULL.

        Raises:
            StorageError: Naming the unmapped columns
        """
        unknown = sorted(key for key in record if key not in self.columns)
        if unknown:
            raise StorageError(
                f"Columns not in {self.table_name}: {', '.join(unknown)}",
                context={
                    "table_name": self.table_name,
                    "operation": "INSERT",
                    "unknown_columns": unknown
                }
            )

    async def insert_batch(self, batch: List[Record], batch_number: Optional[int] = None) -> int:
        """
        Bulk-insert ``batch`` in one transaction.

        Args:
            batch: Records keyed by model attribute name
            batch_number: Position of the batch in the load, for error context

        Returns:
            Number of records inserted

        Raises:
            StorageError: The insert failed; nothing from this batch is kept
        """
        if not batch:
            return 0

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(insert(self.model), batch)

        except SQLAlchemyError as e:
            raise StorageError(
                f"Bulk insert into {self.table_name} failed",
                context={
                    "table_name": self.table_name,
                    "operation": "INSERT",
                    "batch_number": batch_number,
                    "batch_size": len(batch)
                },
                original_exception=e
            )

        return len(batch)

    async def load(self, records: Iterable[Record]) -> LoadSummary:
        """
        Load every record from ``records``.

        The source is read in a worker thread, never past the batch
        capacity, and never while a batch is being inserted.

        Raises:
            ParseError: Propagated from the source, the pending batch is dropped
            StorageError: A record has columns the table lacks, or a batch
                insert failed; the rest of the source is not read
        """
        source = iter(records)
        batch: List[Record] = []
        rows_loaded = 0
        batches_inserted = 0
        exhausted = False

        logger.info(f"Loading into {self.table_name} (batch size {self.batch_size})")

        try:
            while not exhausted:
                exhausted = await asyncio.to_thread(
                    _fill_batch, source, batch, self.batch_size, self.check_columns
                )

                if batch and (len(batch) >= self.batch_size or exhausted):
                    batches_inserted += 1
                    rows_loaded += await self.insert_batch(batch, batches_inserted)
                    batch.clear()

                    logger.info(
                        f"Batch {batches_inserted}: inserted into {self.table_name} "
                        f"(total: {rows_loaded})"
                    )
        finally:
            # Release the file handle of a generator source abandoned mid-way
            close = getattr(source, "close", None)
            if close is not None:
                close()

        logger.info(
            f"Loaded {rows_loaded} rows into {self.table_name} "
            f"in {batches_inserted} batches"
        )

        return LoadSummary(
            table=self.table_name,
            rows_loaded=rows_loaded,
            batches_inserted=batches_inserted
        )

    async def load_csv(self, csv_path: Union[str, Path]) -> LoadSummary:
        """Load every data row of a CSV file"""
        logger.info(f"Reading CSV from {csv_path}")
        return await self.load(iter_csv_records(csv_path))
