"""
Streaming extraction of .tar.gz archives.

The archive is opened in tarfile's stream mode, so gunzip and untar run as
incremental stages over the file and the decompressed content is never
buffered whole. Extraction runs in a worker thread to keep the event loop
free.
"""

import asyncio
import tarfile
import zlib
from pathlib import Path
from typing import Union

from core.exceptions import ExtractionError
import logging

logger = logging.getLogger(__name__)


def _extract(file_path: Path, extract_path: Path) -> int:
    """Unpack every member of the archive, returns the member count"""
    members = 0
    with open(file_path, "rb") as fileobj:
        with tarfile.open(fileobj=fileobj, mode="r|gz") as archive:
            for member in archive:
                if hasattr(tarfile, "data_filter"):
                    archive.extract(member, extract_path, filter="data")
                else:
                    archive.extract(member, extract_path)
                members += 1
    return members


async def extract_tar_gz(file_path: Union[str, Path], extract_path: Union[str, Path]) -> Path:
    """
    Decompress and unpack ``file_path`` into ``extract_path``.

    The archive's internal directory layout is preserved under the
    destination, which is created if missing.

    Raises:
        ExtractionError: Missing, corrupt or malformed archive, unsafe member
            path, or a write failure under the destination
    """
    file_path = Path(file_path)
    extract_path = Path(extract_path)
    context = {"file_path": str(file_path), "extract_path": str(extract_path)}

    logger.info(f"Extracting {file_path} into {extract_path}")

    try:
        extract_path.mkdir(parents=True, exist_ok=True)
        members = await asyncio.to_thread(_extract, file_path, extract_path)

    except (tarfile.TarError, zlib.error, EOFError) as e:
        raise ExtractionError(
            "Archive is corrupt or malformed",
            context=context,
            original_exception=e
        )

    except OSError as e:
        # Also covers gzip.BadGzipFile
        raise ExtractionError(
            "Failed to read archive or write extracted files",
            context=context,
            original_exception=e
        )

    logger.info(f"Extracted {members} archive members into {extract_path}")
    return extract_path
