"""SinkRouter: decides which sinks to build and attaches them at startup.

One activation pass walks the known sink types in a fixed order.  For each
type it checks the enabled switch, the required fields and the debug
suppression policy, builds the transport from the type's typed parameters,
and appends the resulting sink to the pipeline.

Skipping a sink is ordinary control flow.  A failure while building one
sink type is recorded in the report and never stops the remaining types.
"""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from errorlogger.config import ErrorLoggerSettings
from errorlogger.exceptions import SinkConstructionError
from errorlogger.models.catalog import SINK_SPECS
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
    SinkConfig,
    SinkOutcome,
    SinkType,
    SkipReason,
)
from errorlogger.routing.handlers.mail import HostMailerHandler, Mailer, build_message_template
from errorlogger.routing.handlers.newrelic import NewRelicHandler
from errorlogger.routing.handlers.slack import SlackHandler
from errorlogger.routing.pipeline import LoggerPipeline, Sink

logger = logging.getLogger(__name__)

DEFAULT_SMTP_PORT = 25
DEFAULT_SYSLOG_PORT = logging.handlers.SYSLOG_UDP_PORT


def parse_address(text: str, default_port: int) -> str | tuple[str, int]:
    """Parse ``host[:port]`` into a tuple; a path (``/dev/log``) is kept as is."""
    text = text.strip()
    if text.startswith("/"):
        return text
    host, sep, port = text.rpartition(":")
    if not sep:
        return (text, default_port)
    if not port.isdigit():
        raise SinkConstructionError(f"Invalid port in address {text!r}")
    return (host or "localhost", int(port))


def resolve_facility(value: str | int) -> int:
    """Return the syslog facility code for a name (``local0``) or number."""
    known = logging.handlers.SysLogHandler.facility_names
    if isinstance(value, str):
        name = value.strip().lower()
        if name.isdigit():
            value = int(name)
        else:
            name = name.removeprefix("log_")
            if name not in known:
                raise SinkConstructionError(f"Unknown syslog facility {value!r}")
            return known[name]
    if value not in known.values():
        raise SinkConstructionError(f"Unknown syslog facility code {value!r}")
    return value


class SinkRouter:
    """Builds the configured sinks and attaches them to a pipeline.

    Parameters
    ----------
    settings:
        Host settings (application URL, debug flag, mail sender).  Loaded
        from the environment when omitted.
    mailer_provider:
        Returns the host's already-initialized mail transport.  Without it
        the host-mail sink cannot be built.
    http_client:
        ``httpx.Client`` handed to the Slack handler; the handler creates
        its own on first use when omitted.
    newrelic_agent:
        Stand-in for the ``newrelic.agent`` module; the real agent is
        imported when omitted.

    Usage
    -----
    >>> router = SinkRouter(mailer_provider=lambda: smtp)
    >>> report = router.activate(load_sink_configs(source), LoggerPipeline(log))
    >>> report.attached
    [<SinkType.CHAT_WEBHOOK: 'chat_webhook'>]
    """

    def __init__(
        self,
        settings: ErrorLoggerSettings | None = None,
        mailer_provider: Callable[[], Mailer] | None = None,
        http_client: Any = None,
        newrelic_agent: Any = None,
    ) -> None:
        self._settings = settings if settings is not None else ErrorLoggerSettings()
        self._mailer_provider = mailer_provider
        self._http_client = http_client
        self._newrelic_agent = newrelic_agent
        self._builders: dict[SinkType, Callable[[Any], logging.Handler]] = {
            SinkType.NATIVE_MAIL: self._build_native_mail,
            SinkType.HOST_MAIL: self._build_host_mail,
            SinkType.CHAT_WEBHOOK: self._build_chat_webhook,
            SinkType.SYSLOG: self._build_syslog,
            SinkType.APM: self._build_apm,
        }

    @property
    def settings(self) -> ErrorLoggerSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(
        self,
        configs: Mapping[SinkType, SinkConfig],
        pipeline: LoggerPipeline,
        global_debug: bool | None = None,
    ) -> ActivationReport:
        """Build and attach every eligible sink, in activation order.

        Returns the report of attached and skipped sink types.  Never
        raises for a skipped or failed sink type.
        """
        if global_debug is None:
            global_debug = self._settings.app_debug

        report = ActivationReport()
        for sink_type in ACTIVATION_ORDER:
            result = self.try_build(sink_type, configs.get(sink_type), global_debug)
            if isinstance(result, SinkOutcome):
                report.record_skipped(result)
                continue

            try:
                pipeline.attach_sink(result)
            except Exception as exc:  # noqa: BLE001
                result.handler.close()
                outcome = self._failure(sink_type, exc)
                report.record_skipped(outcome)
                continue

            report.record_attached(sink_type)
            logger.info(
                "Attached %s sink (min level %s)", sink_type.value, result.min_level.name
            )

        logger.info("Sink activation finished: %s", report.summary())
        return report

    def try_build(
        self,
        sink_type: SinkType,
        config: SinkConfig | None,
        global_debug: bool = False,
    ) -> Sink | SinkOutcome:
        """Build the sink for one type, or return why it was skipped."""
        spec = SINK_SPECS[sink_type]

        if config is None or not config.enabled:
            logger.debug("Skipping %s sink: disabled", sink_type.value)
            return SinkOutcome(sink_type=sink_type, reason=SkipReason.DISABLED)

        missing = config.missing_fields(spec.required)
        if missing:
            logger.debug("Skipping %s sink: missing %s", sink_type.value, ", ".join(missing))
            return SinkOutcome(
                sink_type=sink_type,
                reason=SkipReason.MISSING_FIELDS,
                detail=", ".join(missing),
            )

        if spec.debug_suppressible and config.debug and global_debug:
            logger.debug("Skipping %s sink: suppressed in debug mode", sink_type.value)
            return SinkOutcome(sink_type=sink_type, reason=SkipReason.DEBUG_SUPPRESSED)

        try:
            params = spec.parameters.model_validate(config.fields)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            logger.debug("Skipping %s sink: invalid %s", sink_type.value, ", ".join(fields))
            return SinkOutcome(
                sink_type=sink_type,
                reason=SkipReason.MISSING_FIELDS,
                detail=", ".join(fields),
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Skipping %s sink: unreadable settings: %s", sink_type.value, exc)
            return SinkOutcome(
                sink_type=sink_type,
                reason=SkipReason.MISSING_FIELDS,
                detail=f"{type(exc).__name__}: {exc}",
            )

        try:
            handler = self._builders[sink_type](params)
            if getattr(params, "format", None):
                handler.setFormatter(logging.Formatter(params.format))
        except Exception as exc:  # noqa: BLE001
            return self._failure(sink_type, exc)

        return Sink(
            kind=SINK_KINDS[sink_type],
            sink_type=sink_type,
            handler=handler,
            min_level=config.min_level,
            bubble=getattr(handler, "bubble", True),
        )

    @staticmethod
    def _failure(sink_type: SinkType, exc: Exception) -> SinkOutcome:
        logger.warning("Could not build %s sink: %s", sink_type.value, exc)
        return SinkOutcome(
            sink_type=sink_type,
            reason=SkipReason.CONSTRUCTION_FAILURE,
            detail=f"{type(exc).__name__}: {exc}",
        )

    # ------------------------------------------------------------------
    # Per-type transports
    # ------------------------------------------------------------------

    def _build_native_mail(self, params: MailParameters) -> logging.Handler:
        mailhost = parse_address(params.mailhost, DEFAULT_SMTP_PORT)
        return logging.handlers.SMTPHandler(
            mailhost=mailhost,
            fromaddr=self._settings.mail_from_address,
            toaddrs=params.email,
            subject=self._settings.mail_subject,
        )

    def _build_host_mail(self, params: MailParameters) -> logging.Handler:
        mailer = self._mailer_provider() if self._mailer_provider is not None else None
        if mailer is None:
            raise SinkConstructionError("Host mailer is not available")
        template = build_message_template(
            self._settings.mail_subject,
            self._settings.mail_from_address,
            params.email,
        )
        return HostMailerHandler(mailer, template)

    def _build_chat_webhook(self, params: ChatWebhookParameters) -> logging.Handler:
        return SlackHandler(
            params.token,
            channel=params.channel,
            username=params.username,
            use_attachment=params.attachment,
            client=self._http_client,
        )

    def _build_syslog(self, params: SyslogParameters) -> logging.Handler:
        facility = resolve_facility(params.facility)
        address = parse_address(params.address, DEFAULT_SYSLOG_PORT)
        handler = logging.handlers.SysLogHandler(address=address, facility=facility)
        handler.ident = f"{params.ident}: "
        return handler

    def _build_apm(self, params: ApmParameters) -> logging.Handler:
        return NewRelicHandler(bubble=True, app_name=params.appname, agent=self._newrelic_agent)
