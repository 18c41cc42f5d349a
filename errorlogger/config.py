"""Host configuration: env-driven via pydantic-settings.

Reads ``ERRORLOGGER_*`` environment variables or a ``.env`` file.  These are
the host-process values the router needs besides the per-sink settings:
application URL (mail subject), debug flag (mail suppression) and the mail
sender address.

Examples
--------
::

    export ERRORLOGGER_APP_URL=https://shop.example.com
    export ERRORLOGGER_APP_DEBUG=true
    export ERRORLOGGER_SETTINGS_FILE=/etc/errorlogger/sinks.toml
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorLoggerSettings(BaseSettings):
    """Host settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ERRORLOGGER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_url: str = "http://localhost"
    app_debug: bool = False
    mail_from_address: str = "errorlogger@localhost"
    log_level: str = "INFO"

    # Optional JSON/TOML file holding the per-sink settings
    settings_file: Path | None = None

    @property
    def mail_subject(self) -> str:
        return f"{self.app_url} - error report"
