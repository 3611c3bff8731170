"""Port interface for outbound email."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MailerPort(Protocol):
    """Port for sending a plain email message.

    Implementations raise on delivery failure, including when email
    delivery is disabled or not configured.
    """

    def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one message to ``to``."""
        ...
