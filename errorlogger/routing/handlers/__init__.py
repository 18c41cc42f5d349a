"""``logging.Handler`` transports not provided by the standard library.

Native mail and syslog use ``logging.handlers.SMTPHandler`` and
``logging.handlers.SysLogHandler`` directly.
"""

from errorlogger.routing.handlers.mail import HostMailerHandler, Mailer, build_message_template
from errorlogger.routing.handlers.newrelic import NewRelicHandler
from errorlogger.routing.handlers.slack import SlackHandler

__all__ = [
    "HostMailerHandler",
    "Mailer",
    "NewRelicHandler",
    "SlackHandler",
    "build_message_template",
]
