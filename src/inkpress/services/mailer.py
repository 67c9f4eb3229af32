"""Outgoing mail used for verification and password reset links."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutgoingMessage:
    """A rendered email waiting to be delivered."""

    to: str
    subject: str
    body: str


class Mailer:
    """Delivers messages by writing them to the application log.

    Deployments plug a real transport in by overriding ``get_mailer``.
    """

    def send(self, message: OutgoingMessage) -> None:
        """Deliver ``message``."""
        logger.info("Mail to %s: %s\n%s", message.to, message.subject, message.body)


@dataclass
class RecordingMailer(Mailer):
    """Keeps every message in memory; handy in tests and local runs."""

    outbox: list[OutgoingMessage] = field(default_factory=list)

    def send(self, message: OutgoingMessage) -> None:
        """Record ``message`` instead of delivering it."""
        self.outbox.append(message)


@lru_cache(maxsize=1)
def get_mailer() -> Mailer:
    """Return the shared mailer instance."""
    return Mailer()
