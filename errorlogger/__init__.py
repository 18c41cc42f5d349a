"""errorlogger: routes application log records to mail, Slack, syslog and New Relic.

At startup the host hands its logger and its stored sink settings to a
``SinkRouter``; every sink type that is enabled and fully configured is
built and attached in a fixed order, and the returned ``ActivationReport``
says which sinks were attached and why the others were skipped.
"""

__version__ = "1.0.0"
__description__ = "Conditional log-sink router for mail, Slack, syslog and New Relic"

from errorlogger.models.sinks import ActivationReport, Severity, SinkConfig, SinkType, SkipReason
from errorlogger.routing import (
    EnvConfigSource,
    LoggerPipeline,
    MappingConfigSource,
    SinkRouter,
    load_sink_configs,
)

__all__ = [
    "ActivationReport",
    "EnvConfigSource",
    "LoggerPipeline",
    "MappingConfigSource",
    "Severity",
    "SinkConfig",
    "SinkRouter",
    "SinkType",
    "SkipReason",
    "load_sink_configs",
    "__version__",
]
