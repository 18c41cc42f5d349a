"""Static description of every known sink type.

The catalog ties a ``SinkType`` to the settings-key prefix it is stored
under, the fields it requires, the typed parameter model its fields are
validated into, and whether host debug mode may suppress it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from errorlogger.models.parameters import (
    ApmParameters,
    ChatWebhookParameters,
    MailParameters,
    SyslogParameters,
)
from errorlogger.models.sinks import SinkType


class SinkSpec(BaseModel):
    """Settings layout and activation policy of one sink type."""

    model_config = ConfigDict(frozen=True)

    sink_type: SinkType
    prefix: str
    required: tuple[str, ...]
    parameters: type[BaseModel]
    debug_suppressible: bool = False

    @property
    def field_names(self) -> tuple[str, ...]:
        """All type-specific field names, required ones first."""
        optional = tuple(
            name for name in self.parameters.model_fields if name not in self.required
        )
        return self.required + optional

    def key(self, name: str) -> str:
        """Return the settings key of field *name*, e.g. ``slack_token``."""
        return f"{self.prefix}_{name}"


SINK_SPECS: dict[SinkType, SinkSpec] = {
    SinkType.NATIVE_MAIL: SinkSpec(
        sink_type=SinkType.NATIVE_MAIL,
        prefix="nativemailer",
        required=("email",),
        parameters=MailParameters,
        debug_suppressible=True,
    ),
    SinkType.HOST_MAIL: SinkSpec(
        sink_type=SinkType.HOST_MAIL,
        prefix="hostmailer",
        required=("email",),
        parameters=MailParameters,
        debug_suppressible=True,
    ),
    SinkType.CHAT_WEBHOOK: SinkSpec(
        sink_type=SinkType.CHAT_WEBHOOK,
        prefix="slack",
        required=("token",),
        parameters=ChatWebhookParameters,
    ),
    SinkType.SYSLOG: SinkSpec(
        sink_type=SinkType.SYSLOG,
        prefix="syslog",
        required=("ident", "facility"),
        parameters=SyslogParameters,
    ),
    SinkType.APM: SinkSpec(
        sink_type=SinkType.APM,
        prefix="newrelic",
        required=("appname",),
        parameters=ApmParameters,
    ),
}
