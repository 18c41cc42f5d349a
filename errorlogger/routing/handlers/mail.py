"""Mail handler that sends through a mailer owned by the host process.

The host already holds an initialized mail transport (an ``smtplib.SMTP``
or anything with ``send_message``).  This handler only builds one message
per record from a template and hands it to that transport; it never opens a
connection of its own.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage
from email.utils import formatdate
from typing import Protocol, runtime_checkable


@runtime_checkable
class Mailer(Protocol):
    """Host mail transport."""

    def send_message(self, msg: EmailMessage) -> object:
        ...


def build_message_template(subject: str, sender: str, recipients: list[str]) -> EmailMessage:
    """Return the header-only message every report is copied from."""
    template = EmailMessage()
    template["Subject"] = subject
    template["From"] = sender
    template["To"] = ", ".join(recipients)
    return template


class HostMailerHandler(logging.Handler):
    """Mails each record through the host's mailer.

    Parameters
    ----------
    mailer:
        The host's initialized transport.
    template:
        Message carrying the Subject/From/To headers; its body is ignored.
    level:
        Minimum stdlib level handled.
    """

    def __init__(self, mailer: Mailer, template: EmailMessage, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.mailer = mailer
        self.template = template

    def build_message(self, record: logging.LogRecord) -> EmailMessage:
        msg = EmailMessage()
        for header, value in self.template.items():
            msg[header] = value
        msg["Date"] = formatdate(record.created, localtime=True)
        msg.set_content(self.format(record))
        return msg

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.mailer.send_message(self.build_message(record))
        except Exception:  # noqa: BLE001
            self.handleError(record)
