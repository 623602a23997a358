"""
Custom exceptions for the dump pipeline with structured error context.

Every stage of the pipeline raises its own exception type and chains the
underlying library error, so a failed run reports where it failed and why.
Nothing here is retried: the first error aborts the run.

Exception Hierarchy:
    PipelineError (base)
    ├── NetworkError
    ├── ExtractionError
    ├── LocalIOError
    ├── ParseError
    └── StorageError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class PipelineError(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (paths, table, line, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[BaseException] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class NetworkError(PipelineError):
    """
    Raised when the archive cannot be fetched.

    Context should include:
        - url: The resource being fetched
        - status_code: HTTP status code (if a response was received)
        - bytes_written: Bytes persisted before the failure
    """
    pass


class ExtractionError(PipelineError):
    """
    Raised when the archive cannot be decompressed or unpacked.

    Context should include:
        - file_path: Path to the archive
        - extract_path: Destination directory
    """
    pass


class LocalIOError(PipelineError):
    """
    Raised on local filesystem failures (unwritable download target,
    unreadable CSV file).

    Context should include:
        - file_path: The path that could not be read or written
    """
    pass


class ParseError(PipelineError):
    """
    Raised when a CSV row is malformed.

    Context should include:
        - file_path: Path to the CSV file
        - line_number: Line number where the error occurred
        - expected_fields / actual_fields: Field counts (for count mismatches)
    """
    pass


class StorageError(PipelineError):
    """
    Raised when schema setup or a bulk insert fails.

    Context should include:
        - table_name: Name of the table
        - operation: CREATE TABLE or INSERT
        - batch_number / batch_size: For insert failures
    """
    pass
