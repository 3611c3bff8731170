"""SMTP mailer implementing :class:`~perfectpic.foundation.domain.ports.MailerPort`."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr, parseaddr
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perfectpic.infra.mail.smtp_settings import SmtpSettings

logger = logging.getLogger(__name__)


class MailDeliveryError(RuntimeError):
    """Raised when a message cannot be delivered."""


class SmtpMailer:
    """Sends plain-text mail through an SMTP server.

    Implicit TLS is used when ``settings.ssl`` is set, otherwise the
    connection is upgraded with STARTTLS when the server offers it.

    Args:
        settings: SMTP configuration.
    """

    def __init__(self, settings: SmtpSettings) -> None:
        self._settings = settings

    def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one message.

        Raises:
            MailDeliveryError: If SMTP is not configured or delivery fails.
        """
        s = self._settings
        if not s.configured:
            raise MailDeliveryError("SMTP host is not configured")

        message = EmailMessage()
        message["From"] = _format_address(s.from_address or s.username)
        message["To"] = _format_address(to)
        message["Subject"] = subject
        message.set_content(body)

        context = ssl.create_default_context()
        try:
            if s.ssl:
                with smtplib.SMTP_SSL(s.host, s.port, timeout=s.timeout, context=context) as smtp:
                    self._deliver(smtp, message)
            else:
                with smtplib.SMTP(s.host, s.port, timeout=s.timeout) as smtp:
                    smtp.ehlo()
                    if smtp.has_extn("starttls"):
                        smtp.starttls(context=context)
                        smtp.ehlo()
                    self._deliver(smtp, message)
        except (smtplib.SMTPException, OSError) as err:
            raise MailDeliveryError(f"SMTP delivery failed: {err}") from err

        logger.info("mail_sent", extra={"smtp_host": s.host})

    def _deliver(self, smtp: smtplib.SMTP, message: EmailMessage) -> None:
        if self._settings.username:
            smtp.login(self._settings.username, self._settings.password)
        smtp.send_message(message)


def _format_address(address: str) -> str:
    name, addr = parseaddr(address)
    if not addr:
        raise MailDeliveryError(f"Invalid email address: {address!r}")
    return formataddr((name, addr))
