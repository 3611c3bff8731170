"""Unit tests for perfectpic.infra.mail (smtplib is mocked)."""

from __future__ import annotations

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from perfectpic.foundation.domain import MailerPort
from perfectpic.infra.mail import MailDeliveryError, SmtpMailer, SmtpSettings


def _settings(**overrides: object) -> SmtpSettings:
    values: dict[str, object] = {
        "host": "smtp.example.com",
        "port": 587,
        "username": "mailer@example.com",
        "password": "app-password",
        "from_address": "Perfect Pic <noreply@example.com>",
    }
    values.update(overrides)
    return SmtpSettings(**values)  # type: ignore[arg-type]


class TestSmtpSettings:
    @pytest.mark.unit
    def test_defaults_unconfigured(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = SmtpSettings(_env_file=None)  # type: ignore[call-arg]
            assert settings.configured is False
            assert settings.port == 587
            assert settings.ssl is False

    @pytest.mark.unit
    def test_password_hidden_in_repr(self) -> None:
        assert "app-password" not in repr(_settings())


class TestSmtpMailer:
    @pytest.mark.unit
    def test_unconfigured_raises(self) -> None:
        with pytest.raises(MailDeliveryError, match="not configured"):
            SmtpMailer(_settings(host="")).send("ops@example.com", "s", "b")

    @pytest.mark.unit
    def test_starttls_login_and_send(self) -> None:
        with patch("perfectpic.infra.mail.smtp_mailer.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            smtp.has_extn.return_value = True

            SmtpMailer(_settings()).send("ops@example.com", "Subject", "Body")

        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=10.0)
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("mailer@example.com", "app-password")
        message = smtp.send_message.call_args.args[0]
        assert message["To"] == "ops@example.com"
        assert message["From"] == "Perfect Pic <noreply@example.com>"
        assert message["Subject"] == "Subject"
        assert message.get_content().strip() == "Body"

    @pytest.mark.unit
    def test_implicit_tls_without_login(self) -> None:
        with patch("perfectpic.infra.mail.smtp_mailer.smtplib.SMTP_SSL") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value

            SmtpMailer(_settings(ssl=True, port=465, username="", password="")).send(
                "ops@example.com", "s", "b"
            )

        assert smtp_cls.call_args.args == ("smtp.example.com", 465)
        smtp.login.assert_not_called()
        smtp.send_message.assert_called_once()

    @pytest.mark.unit
    def test_no_starttls_when_not_offered(self) -> None:
        with patch("perfectpic.infra.mail.smtp_mailer.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            smtp.has_extn.return_value = False

            SmtpMailer(_settings()).send("ops@example.com", "s", "b")

        smtp.starttls.assert_not_called()

    @pytest.mark.unit
    def test_smtp_error_wrapped(self) -> None:
        with patch("perfectpic.infra.mail.smtp_mailer.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

            with pytest.raises(MailDeliveryError) as exc_info:
                SmtpMailer(_settings()).send("ops@example.com", "s", "b")

        assert isinstance(exc_info.value.__cause__, smtplib.SMTPException)

    @pytest.mark.unit
    def test_connection_error_wrapped(self) -> None:
        with patch(
            "perfectpic.infra.mail.smtp_mailer.smtplib.SMTP",
            side_effect=ConnectionRefusedError("refused"),
        ), pytest.raises(MailDeliveryError):
            SmtpMailer(_settings()).send("ops@example.com", "s", "b")

    @pytest.mark.unit
    def test_satisfies_port(self) -> None:
        assert isinstance(SmtpMailer(_settings()), MailerPort)
        assert isinstance(MagicMock(spec=SmtpMailer), MailerPort)
