"""
Core utilities and configuration for the dump loader.

Modules:
    config: Application configuration and environment variable management
    database: Async engine and session factory creation
    exceptions: Exception hierarchy for pipeline errors
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import create_engine, create_session_factory
    from core.exceptions import NetworkError, ParseError, StorageError
    from core.logging import setup_logging
"""

__all__ = [
    "settings",
    "create_engine",
    "create_session_factory",
    "setup_logging",
    # Exceptions
    "PipelineError",
    "NetworkError",
    "ExtractionError",
    "LocalIOError",
    "ParseError",
    "StorageError",
]
