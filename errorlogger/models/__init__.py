"""errorlogger data models: Pydantic v2, frozen where they are snapshots."""

from errorlogger.models.catalog import SINK_SPECS, SinkSpec
from errorlogger.models.parameters import (
    ApmParameters,
    ChatWebhookParameters,
    MailParameters,
    SyslogParameters,
)
from errorlogger.models.sinks import (
    ACTIVATION_ORDER,
    SINK_KINDS,
    ActivationReport,
    Severity,
    SinkConfig,
    SinkKind,
    SinkOutcome,
    SinkType,
    SkipReason,
    is_blank,
)

__all__ = [
    # sinks
    "ACTIVATION_ORDER",
    "SINK_KINDS",
    "ActivationReport",
    "Severity",
    "SinkConfig",
    "SinkKind",
    "SinkOutcome",
    "SinkType",
    "SkipReason",
    "is_blank",
    # catalog
    "SINK_SPECS",
    "SinkSpec",
    # parameters
    "ApmParameters",
    "ChatWebhookParameters",
    "MailParameters",
    "SyslogParameters",
]
