"""Notifier port definition (interface)."""

from __future__ import annotations

from typing import Any, Protocol

__all__ = ["NotifierPort"]


class NotifierPort(Protocol):
    """Interface for delivering alerts to a messaging channel.

    Implementations raise ``NotifyError`` subclasses on failure; callers
    decide whether that is fatal (the pulse cycle never treats it so).
    """

    async def notify(self, channel: str, message: str) -> None:
        """Send a plain-text message.

        Args:
            channel: Target channel name (e.g. ``#webserver-alerts``).
            message: Message text.
        """
        ...

    async def notify_rich(
        self,
        channel: str,
        message: str,
        attachments: list[dict[str, Any]] | None = None,
    ) -> None:
        """Send a message with optional attachments.

        Args:
            channel: Target channel name.
            message: Fallback/main text.
            attachments: Attachment objects rendered by the chat client.
        """
        ...
