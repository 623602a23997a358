"""
Pipeline components for loading the data dump.

Modules:
    schema: Idempotent creation of the output tables
    runner: Orchestrator that sequences every stage of a run

Subpackages:
    extractors: Archive download, archive extraction, CSV record source
    loaders: Streaming batch loader

Architecture:
    download -> extract -> set up tables -> load organizations -> load customers

    Each stage raises its own exception from core.exceptions and the first
    failure aborts the run. Loading is batched: at most BATCH_SIZE rows are
    held in memory and the CSV is not read while a batch is being inserted.

Usage:
    from ingestion.runner import DumpPipelineRunner, process_data_dump

Example:
    summary = await process_data_dump()
    print(f"Loaded {summary.total_rows} rows")
"""

__all__ = [
    "DumpPipelineRunner",
    "process_data_dump",
    "BatchLoader",
    "setup_tables",
    "download_file",
    "extract_tar_gz",
    "iter_csv_records",
]
