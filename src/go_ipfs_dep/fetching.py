"""Streaming HTTP download of release archives."""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import aiohttp

from go_ipfs_dep.constants import CHUNK_SIZE
from go_ipfs_dep.errors import TransferError
from go_ipfs_dep.logging import get_logger, report

logger = get_logger(__name__)


async def iter_body(url: str, response: aiohttp.ClientResponse) -> AsyncIterator[bytes]:
    """Yield response body chunks, mapping read failures to TransferError."""
    received = 0
    try:
        async for chunk in response.content.iter_chunked(CHUNK_SIZE):
            received += len(chunk)
            yield chunk
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransferError(url, reason=f"Failed to read {url}: {e}") from e

    logger.debug({"event": "body_received", "url": url, "size": received})


@asynccontextmanager
async def _session_scope(session: Optional[aiohttp.ClientSession], timeout: Optional[float]):
    if session is not None:
        yield session
        return
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as owned:
        yield owned


@asynccontextmanager
async def fetch(
    url: str,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: Optional[float] = None,
) -> AsyncIterator[AsyncIterator[bytes]]:
    """GET url once and yield its body as a chunk stream.

    Only a 200 response yields; any other status or a connection failure
    raises TransferError. No timeout applies unless one is given.
    """
    report(f"Downloading {url}")

    try:
        async with _session_scope(session, timeout) as client:
            request_options = {}
            if timeout is not None:
                request_options["timeout"] = aiohttp.ClientTimeout(total=timeout)

            async with client.get(url, **request_options) as response:
                if response.status != 200:
                    body = await response.text(errors="replace")
                    logger.error(
                        {
                            "event": "download_request_failed",
                            "url": url,
                            "status": response.status,
                            "reason": response.reason,
                        }
                    )
                    raise TransferError(url, status=response.status, body=body)

                logger.debug(
                    {
                        "event": "download_started",
                        "url": url,
                        "expected_size": response.content_length,
                    }
                )
                yield iter_body(url, response)

    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error({"event": "download_failed", "url": url, "error": str(e)})
        raise TransferError(url, reason=f"Failed to download {url}: {e}") from e
