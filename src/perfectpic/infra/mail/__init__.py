"""Perfect Pic mail infrastructure -- SMTP delivery."""

from perfectpic.infra.mail.smtp_mailer import MailDeliveryError, SmtpMailer
from perfectpic.infra.mail.smtp_settings import SmtpSettings, get_smtp_settings

__all__ = ["MailDeliveryError", "SmtpMailer", "SmtpSettings", "get_smtp_settings"]
