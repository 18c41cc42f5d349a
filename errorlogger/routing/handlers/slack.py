"""Slack handler: posts records to a channel through the Slack Web API.

One ``chat.postMessage`` call per record.  The HTTP client is created on
the first record, so constructing the handler never touches the network.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from errorlogger.routing.handlers._formatting import level_color

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"


class SlackHandler(logging.Handler):
    """Sends records to a Slack channel as a bot user.

    Parameters
    ----------
    token:
        Slack bot/API token.
    channel:
        Channel name (without ``#``) or id.
    username:
        Name the bot posts as.
    use_attachment:
        Post the record as a colored attachment with level and logger
        fields instead of plain text.
    client:
        Optional ``httpx.Client``; when given, the caller owns it.
    """

    def __init__(
        self,
        token: str,
        channel: str = "random",
        username: str = "error-bot",
        use_attachment: bool = False,
        level: int = logging.NOTSET,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(level)
        if not token:
            raise ValueError("Slack token must not be empty")
        self.token = token
        self.channel = channel
        self.username = username
        self.use_attachment = use_attachment
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def build_payload(self, record: logging.LogRecord) -> dict[str, Any]:
        """Return the ``chat.postMessage`` body for *record*."""
        message = self.format(record)
        payload: dict[str, Any] = {
            "channel": self.channel,
            "username": self.username,
        }
        if not self.use_attachment:
            payload["text"] = message
            return payload

        payload["attachments"] = [
            {
                "fallback": message,
                "color": level_color(record),
                "title": record.getMessage(),
                "text": message,
                "fields": [
                    {"title": "Level", "value": record.levelname, "short": True},
                    {"title": "Logger", "value": record.name, "short": True},
                ],
                "ts": int(record.created),
            }
        ]
        return payload

    def emit(self, record: logging.LogRecord) -> None:
        try:
            response = self.client.post(
                SLACK_POST_MESSAGE_URL,
                json=self.build_payload(record),
                headers={"Authorization": f"Bearer {self.token}"},
            )
            response.raise_for_status()
            body = response.json()
            if not body.get("ok", False):
                raise RuntimeError(f"Slack API error: {body.get('error', 'unknown')}")
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def close(self) -> None:
        try:
            if self._owns_client and self._client is not None:
                self._client.close()
                self._client = None
        finally:
            super().close()
