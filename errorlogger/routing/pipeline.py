"""LoggerPipeline: the ordered set of sinks attached to a host logger.

The host passes its ``logging.Logger`` in explicitly; the pipeline never
looks up a process-wide logger on its own.  Sinks are attached during the
activation pass and then only read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from errorlogger.models.sinks import Severity, SinkKind, SinkType

logger = logging.getLogger(__name__)

# Record attribute set once a non-bubbling sink has accepted the record
_STOPPED_ATTR = "_errorlogger_stopped"


@dataclass(eq=False)
class Sink:
    """A constructed endpoint ready to receive log records.

    The ``handler`` is the sink's transport and is owned by the sink alone;
    it is closed when the pipeline shuts down.
    """

    kind: SinkKind
    sink_type: SinkType
    handler: logging.Handler
    min_level: Severity = Severity.DEBUG
    bubble: bool = True
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.sink_type.value
        self.handler.setLevel(self.min_level.to_logging_level())

    def accepts(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.handler.level


class _BubbleFilter(logging.Filter):
    """Drops records already claimed by an earlier non-bubbling sink.

    Handlers on a logger run in attach order, so the first sink with
    ``bubble=False`` that accepts a record marks it and every later sink
    sees the mark.
    """

    def __init__(self, sink: Sink) -> None:
        super().__init__()
        self._sink = sink

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, _STOPPED_ATTR, False):
            return False
        if not self._sink.bubble and self._sink.accepts(record):
            setattr(record, _STOPPED_ATTR, True)
        return True


class LoggerPipeline:
    """Ordered sinks attached to a host ``logging.Logger``.

    Usage
    -----
    >>> pipeline = LoggerPipeline(logging.getLogger("app"))
    >>> pipeline.attach_sink(sink)
    >>> pipeline.sinks
    [Sink(...)]
    """

    def __init__(self, target: logging.Logger) -> None:
        self._logger = target
        self._sinks: list[Sink] = []

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def sinks(self) -> list[Sink]:
        """Return a copy of the attached sinks, in attach order."""
        return list(self._sinks)

    def attach_sink(self, sink: Sink) -> None:
        """Append *sink* and register its handler on the logger."""
        sink.handler.addFilter(_BubbleFilter(sink))
        self._sinks.append(sink)
        self._logger.addHandler(sink.handler)
        logger.debug("Attached sink %s to logger %r", sink.name, self._logger.name)

    def close(self) -> None:
        """Detach every sink from the logger and close its transport."""
        while self._sinks:
            sink = self._sinks.pop()
            self._logger.removeHandler(sink.handler)
            try:
                sink.handler.close()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Closing sink %s failed: %s", sink.name, exc)
