"""Slack notifier adapter (chat.postMessage)."""

import asyncio
import logging
import os
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from health_pulse.ports.errors import MissingCredential, NotifyApiError, NotifyTransportError
from health_pulse.ports.notifier import NotifierPort

__all__ = ["SlackNotifier", "SLACK_TOKEN_ENV", "SLACK_API_URL"]

logger = logging.getLogger(__name__)

SLACK_TOKEN_ENV = "SLACK_OAUTH_TOKEN"
SLACK_API_URL = "https://slack.com/api/chat.postMessage"
NOTIFY_TIMEOUT_SEC = 10


class SlackNotifier(NotifierPort):
    """Posts messages to a Slack channel with a bot token.

    The token is read from the environment on every send, so it can be
    provisioned after startup. Slack reports failures in two ways: an HTTP
    error status, or HTTP 200 with ``{"ok": false, "error": ...}``; both
    are raised as distinct ``NotifyError`` subclasses.
    """

    def __init__(
        self,
        api_url: str = SLACK_API_URL,
        token_env: str = SLACK_TOKEN_ENV,
        environ: Mapping[str, str] | None = None,
        timeout_sec: float = NOTIFY_TIMEOUT_SEC,
    ) -> None:
        """Initialize the notifier.

        Args:
            api_url: chat.postMessage URL.
            token_env: Name of the env variable holding the bot token.
            environ: Environment to read the token from (``os.environ`` if None).
            timeout_sec: Total timeout for one API call.
        """
        self.api_url = api_url
        self.token_env = token_env
        self.environ = os.environ if environ is None else environ
        self.timeout_sec = timeout_sec
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "SlackNotifier":
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.session:
            await self.session.close()

    def _resolve_token(self) -> str:
        token = self.environ.get(self.token_env)
        if not token:
            raise MissingCredential(
                f"{self.token_env} environment variable not set, skipping Slack notification"
            )
        return token

    async def notify(self, channel: str, message: str) -> None:
        """Send a plain-text message to ``channel``."""
        await self._post({"channel": channel, "text": message})

    async def notify_rich(
        self,
        channel: str,
        message: str,
        attachments: list[dict[str, Any]] | None = None,
    ) -> None:
        """Send a message with legacy attachments to ``channel``."""
        payload: dict[str, Any] = {"channel": channel, "text": message}
        if attachments is not None:
            payload["attachments"] = attachments
        await self._post(payload)

    async def _post(self, payload: dict[str, Any]) -> None:
        """POST a chat.postMessage payload and check Slack's envelope.

        Raises:
            RuntimeError: If session not initialized.
            MissingCredential: If the bot token is not set.
            NotifyTransportError: On network error, timeout, HTTP error
                status or a non-JSON body.
            NotifyApiError: If Slack answers ``ok: false``.
        """
        token = self._resolve_token()
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        try:
            async with self.session.post(
                self.api_url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
                timeout=ClientTimeout(total=self.timeout_sec),
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise NotifyTransportError(f"HTTP error: {resp.status}")
                body = await resp.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise NotifyTransportError(f"Slack API timed out after {self.timeout_sec}s") from e
        except aiohttp.ClientError as e:
            raise NotifyTransportError(f"Slack API unreachable: {e}") from e
        except ValueError as e:
            raise NotifyTransportError(f"Slack API returned invalid JSON: {e}") from e

        if not isinstance(body, dict) or not body.get("ok", False):
            error = body.get("error") if isinstance(body, dict) else None
            raise NotifyApiError(error or "Unknown error")

        logger.debug(f"Message sent to {payload['channel']}")
