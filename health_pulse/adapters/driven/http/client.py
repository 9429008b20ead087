"""HTTP client adapter for endpoint probes."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout

from health_pulse.ports.errors import RequestTransportError
from health_pulse.ports.http import HttpReply, ProbeRequest

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 30.0


class HttpClient:
    """HTTP client sending one POST per probe.

    Features:
    - JSON body with optional bearer authorization.
    - Explicit total timeout so a hung endpoint cannot stall rotation.
    - Single attempt, no retry.
    - Context manager for proper resource cleanup.
    """

    def __init__(self, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> None:
        """Initialize HTTP client.

        Args:
            timeout_sec: Total timeout for one request, in seconds.
        """
        self.timeout_sec = timeout_sec
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session)."""
        if self.session:
            await self.session.close()

    @staticmethod
    def build_headers(auth_token: str | None) -> dict[str, str]:
        """Headers for a probe request.

        Args:
            auth_token: Optional bearer token.

        Returns:
            Header mapping with JSON content type and, if given, Authorization.
        """
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        return headers

    async def post_query(self, req: ProbeRequest) -> HttpReply:
        """Send one probe POST and read the whole body.

        Args:
            req: Probe request with URL, payload and optional token.

        Returns:
            Status code and body text of the response, whatever the status.

        Raises:
            RuntimeError: If session not initialized.
            RequestTransportError: On network errors or timeout.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        try:
            resp = await self.session.post(
                req.url,
                json=req.payload,
                headers=self.build_headers(req.auth_token),
                timeout=ClientTimeout(total=self.timeout_sec),
            )
            body = await resp.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise RequestTransportError(
                f"Request to {req.url} timed out after {self.timeout_sec}s"
            ) from e
        except aiohttp.ClientError as e:
            raise RequestTransportError(f"Request to {req.url} failed: {e}") from e

        logger.debug(f"POST {req.url} returned status {resp.status}")
        return HttpReply(status=resp.status, body=body)
