"""Async client for the Spring Initializr download endpoint.

Streams ``/starter.zip`` responses straight to disk so memory use stays
bounded whatever the archive size.  A download is a single attempt: a
non-success status raises ``RemoteGenerationError`` and any transport or
local I/O failure raises ``TransferError`` after the partial file has been
removed.

Typical usage::

    client = InitializrClient()
    archive = await client.download(url, staging_dir / "starter.zip")
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from .models import RemoteGenerationError, TransferError

_logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class InitializrClient:
    """Downloads generated project archives over HTTP.

    The client uses ``httpx.AsyncClient`` for non-blocking HTTP.  A custom
    ``transport`` may be supplied, which is how tests serve canned archives.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        connect_timeout: float = 10.0,
        user_agent: str = "spring-scaffolder",
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.user_agent = user_agent
        self.transport = transport
        self.logger = logger or _logger

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our timeout and headers."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            transport=self.transport,
        )

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            _logger.debug("Could not remove partial download %s", path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def download(self, url: str, destination: str | Path) -> Path:
        """Download the archive at *url* into *destination*.

        Args:
            url: Fully-built Spring Initializr URL.
            destination: File to create; its parent must exist.

        Returns:
            The destination path.

        Raises:
            RemoteGenerationError: The service answered with a non-2xx status.
            TransferError: The connection or the local write failed.
        """
        target = Path(destination)
        self.logger.info("Downloading Spring Boot project from: %s", url)

        try:
            async with self._client() as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        raise RemoteGenerationError(response.status_code, url)

                    with target.open("wb") as fh:
                        async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                            fh.write(chunk)
        except RemoteGenerationError:
            raise
        except httpx.HTTPError as exc:
            self._discard(target)
            raise TransferError(url, str(exc) or type(exc).__name__) from exc
        except OSError as exc:
            self._discard(target)
            raise TransferError(url, str(exc)) from exc

        self.logger.info("Downloaded Spring Boot project to %s", target)
        return target
