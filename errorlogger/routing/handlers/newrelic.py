"""New Relic handler: reports records to the New Relic Python agent.

Records carrying exception info become agent errors; other records become
``LogRecord`` custom events.  The agent itself is an external dependency
(``pip install errorlogger[apm]``); without it the handler cannot be built.
"""

from __future__ import annotations

import logging
from typing import Any

from errorlogger.exceptions import SinkConstructionError
from errorlogger.routing.handlers._formatting import record_attributes

CUSTOM_EVENT_TYPE = "LogRecord"


def _load_agent() -> Any:
    try:
        import newrelic.agent
    except ImportError as exc:
        raise SinkConstructionError(
            "New Relic agent is not installed (pip install errorlogger[apm])"
        ) from exc
    return newrelic.agent


class NewRelicHandler(logging.Handler):
    """Forwards records to New Relic under a fixed application name.

    Parameters
    ----------
    level:
        Minimum stdlib level handled.
    bubble:
        Whether records continue to sinks attached after this one.
    app_name:
        New Relic application the records are reported under.
    agent:
        The ``newrelic.agent`` module or a stand-in with the same
        ``application``/``notice_error``/``record_custom_event`` calls.
    """

    def __init__(
        self,
        level: int = logging.NOTSET,
        bubble: bool = True,
        app_name: str | None = None,
        agent: Any = None,
    ) -> None:
        super().__init__(level)
        self.bubble = bubble
        self.app_name = app_name
        self.agent = agent if agent is not None else _load_agent()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            application = self.agent.application(self.app_name) if self.app_name else None
            attributes = record_attributes(record)
            attributes["formatted"] = self.format(record)
            if record.exc_info:
                self.agent.notice_error(
                    error=record.exc_info,
                    attributes=attributes,
                    application=application,
                )
            else:
                self.agent.record_custom_event(
                    CUSTOM_EVENT_TYPE,
                    attributes,
                    application=application,
                )
        except Exception:  # noqa: BLE001
            self.handleError(record)
