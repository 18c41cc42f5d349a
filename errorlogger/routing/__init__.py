"""Sink routing: builds notification sinks and attaches them to a logger.

The ``SinkRouter`` runs one activation pass at startup: it reads a
``SinkConfig`` per sink type, skips types that are disabled, incomplete or
suppressed in debug mode, builds the remaining transports (mail, Slack,
syslog, New Relic) and appends them to a ``LoggerPipeline`` wrapping the
host's logger.  The ``ActivationReport`` it returns is the only signal of
what happened.
"""

from errorlogger.routing.pipeline import LoggerPipeline, Sink
from errorlogger.routing.router import SinkRouter
from errorlogger.routing.sources import (
    ConfigSource,
    EnvConfigSource,
    MappingConfigSource,
    load_sink_config,
    load_sink_configs,
)

__all__ = [
    "ConfigSource",
    "EnvConfigSource",
    "LoggerPipeline",
    "MappingConfigSource",
    "Sink",
    "SinkRouter",
    "load_sink_config",
    "load_sink_configs",
]
