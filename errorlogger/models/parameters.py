"""Typed parameter models, one per sink type.

Each model is validated from a ``SinkConfig.fields`` mapping when the sink
is built.  Required fields carry no default; optional ones carry the
documented defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _split_addresses(value: Any) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"expected an address or a list of addresses, got {type(value).__name__}")
    return [str(part).strip() for part in value if str(part).strip()]


class _Parameters(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    format: str | None = None


class MailParameters(_Parameters):
    """Recipients of an error report mail (native or host mailer)."""

    email: list[str]
    mailhost: str = "localhost"

    @field_validator("email", mode="before")
    @classmethod
    def _split_email(cls, value: Any) -> list[str]:
        addresses = _split_addresses(value)
        if not addresses:
            raise ValueError("at least one recipient address is required")
        return addresses


class ChatWebhookParameters(_Parameters):
    """Slack bot settings."""

    token: str
    channel: str = "random"
    username: str = "error-bot"
    attachment: bool = False


class SyslogParameters(_Parameters):
    """Syslog identity, facility and target address."""

    ident: str
    facility: str | int
    address: str = "localhost:514"


class ApmParameters(_Parameters):
    """New Relic application name."""

    appname: str
