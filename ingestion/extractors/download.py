"""
Archive download over HTTPS.

The response body is streamed to disk chunk by chunk, so the archive is
never held in memory. A single attempt is made: any failure aborts the run.
"""

import asyncio
import os
from pathlib import Path
from typing import Optional, Union

import httpx
from core.config import settings
from core.exceptions import LocalIOError, NetworkError
import logging

logger = logging.getLogger(__name__)


def _sync_to_disk(handle) -> None:
    handle.flush()
    os.fsync(handle.fileno())


async def download_file(
    url: str,
    file_path: Union[str, Path],
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None
) -> Path:
    """
    Download ``url`` and save the body to ``file_path``.

    Args:
        url: Resource to fetch (certificates are verified for https URLs)
        file_path: Destination file, parent directories are created
        client: Optional client to issue the request with (owned by the caller)
        timeout: Request timeout in seconds, defaults to settings.HTTP_TIMEOUT

    Returns:
        Path to the written file, flushed and fsynced

    Raises:
        NetworkError: Connection failure, non-2xx status or dropped transfer
        LocalIOError: Destination cannot be created or written
    """
    file_path = Path(file_path)
    timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LocalIOError(
            "Cannot create download directory",
            context={"file_path": str(file_path)},
            original_exception=e
        )

    logger.info(f"Downloading {url} to {file_path}")

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    bytes_written = 0
    try:
        async with client.stream("GET", url) as response:
            if response.is_error:
                raise NetworkError(
                    f"Download failed with HTTP {response.status_code}",
                    context={"url": url, "status_code": response.status_code}
                )

            try:
                handle = await asyncio.to_thread(open, file_path, "wb")
            except OSError as e:
                raise LocalIOError(
                    "Cannot open download destination",
                    context={"file_path": str(file_path)},
                    original_exception=e
                )

            with handle:
                async for chunk in response.aiter_bytes():
                    try:
                        await asyncio.to_thread(handle.write, chunk)
                    except OSError as e:
                        raise LocalIOError(
                            "Cannot write download destination",
                            context={"file_path": str(file_path), "bytes_written": bytes_written},
                            original_exception=e
                        )
                    bytes_written += len(chunk)

                try:
                    await asyncio.to_thread(_sync_to_disk, handle)
                except OSError as e:
                    raise LocalIOError(
                        "Cannot flush download destination",
                        context={"file_path": str(file_path)},
                        original_exception=e
                    )

    except httpx.HTTPError as e:
        raise NetworkError(
            f"Network error while downloading {url}",
            context={"url": url, "bytes_written": bytes_written},
            original_exception=e
        )

    finally:
        if owns_client:
            await client.aclose()

    logger.info(f"Downloaded {bytes_written} bytes to {file_path}")
    return file_path
