"""Shared test fixtures for errorlogger."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from email.message import EmailMessage
from typing import Any

import httpx
import pytest

from errorlogger.config import ErrorLoggerSettings
from errorlogger.models.catalog import SINK_SPECS
from errorlogger.models.sinks import Severity, SinkConfig, SinkType
from errorlogger.routing.pipeline import LoggerPipeline
from errorlogger.routing.router import SinkRouter

_logger_ids = itertools.count()


class FakeMailer:
    """Stands in for the host's SMTP transport."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    def send_message(self, msg: EmailMessage) -> dict[str, Any]:
        self.sent.append(msg)
        return {}


class FakeNewRelicAgent:
    """Records calls made against the ``newrelic.agent`` API."""

    def __init__(self) -> None:
        self.applications: list[str] = []
        self.errors: list[dict[str, Any]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def application(self, name: str) -> str:
        self.applications.append(name)
        return f"app:{name}"

    def notice_error(self, error: Any = None, attributes: Any = None, application: Any = None) -> None:
        self.errors.append({"error": error, "attributes": attributes, "application": application})

    def record_custom_event(self, event_type: str, params: dict[str, Any], application: Any = None) -> None:
        self.events.append((event_type, params))


@pytest.fixture
def settings() -> ErrorLoggerSettings:
    """Host settings with deterministic values."""
    return ErrorLoggerSettings(
        app_url="https://shop.example.com",
        app_debug=False,
        mail_from_address="noreply@shop.example.com",
    )


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def newrelic_agent() -> FakeNewRelicAgent:
    return FakeNewRelicAgent()


@pytest.fixture
def slack_requests() -> list[httpx.Request]:
    """Requests captured by the ``http_client`` fixture."""
    return []


@pytest.fixture
def http_client(slack_requests: list[httpx.Request]) -> Iterator[httpx.Client]:
    """An httpx client whose transport answers every Slack call with ok."""

    def _handler(request: httpx.Request) -> httpx.Response:
        slack_requests.append(request)
        return httpx.Response(200, json={"ok": True})

    client = httpx.Client(transport=httpx.MockTransport(_handler))
    yield client
    client.close()


@pytest.fixture
def router(
    settings: ErrorLoggerSettings,
    mailer: FakeMailer,
    http_client: httpx.Client,
    newrelic_agent: FakeNewRelicAgent,
) -> SinkRouter:
    """A router wired to fake collaborators only."""
    return SinkRouter(
        settings=settings,
        mailer_provider=lambda: mailer,
        http_client=http_client,
        newrelic_agent=newrelic_agent,
    )


@pytest.fixture
def host_logger() -> Iterator[logging.Logger]:
    """A fresh, non-propagating logger per test."""
    log = logging.getLogger(f"errorlogger.tests.host{next(_logger_ids)}")
    log.propagate = False
    log.setLevel(logging.DEBUG)
    yield log
    for handler in list(log.handlers):
        log.removeHandler(handler)


@pytest.fixture
def pipeline(host_logger: logging.Logger) -> Iterator[LoggerPipeline]:
    pipe = LoggerPipeline(host_logger)
    yield pipe
    pipe.close()


@pytest.fixture
def make_config() -> Callable[..., SinkConfig]:
    """Factory fixture: build an enabled SinkConfig for a sink type."""

    def _factory(
        sink_type: SinkType,
        enabled: bool = True,
        min_level: Severity | int | str = Severity.DEBUG,
        debug: bool = False,
        **fields: Any,
    ) -> SinkConfig:
        return SinkConfig(
            sink_type=sink_type,
            enabled=enabled,
            required_fields=frozenset(SINK_SPECS[sink_type].required),
            fields=fields,
            min_level=min_level,
            debug=debug,
        )

    return _factory


@pytest.fixture
def full_configs(make_config: Callable[..., SinkConfig]) -> dict[SinkType, SinkConfig]:
    """Every sink type enabled with valid settings."""
    return {
        SinkType.NATIVE_MAIL: make_config(SinkType.NATIVE_MAIL, email="ops@shop.example.com"),
        SinkType.HOST_MAIL: make_config(SinkType.HOST_MAIL, email="ops@shop.example.com"),
        SinkType.CHAT_WEBHOOK: make_config(SinkType.CHAT_WEBHOOK, token="xoxb-test"),
        SinkType.SYSLOG: make_config(
            SinkType.SYSLOG, ident="shop", facility="local0", address="127.0.0.1:514"
        ),
        SinkType.APM: make_config(SinkType.APM, appname="shop"),
    }
