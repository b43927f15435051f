"""
Password delivery notifiers.

Each notifier sends a project's unlock password over one channel and reports
how it went. The simulated notifiers below never touch a transport; swap in a
real implementation through settings.DELIVERY_NOTIFIERS.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised by a notifier whose transport rejected the message."""


@dataclass
class NotificationResult:
    success: bool
    recipient: str
    message: str


class Notifier:
    channel = None
    label = None

    def resolve_recipient(self, client):
        """Address this channel would use for the client, or None if unknown."""
        return None

    def send(self, project):
        raise NotImplementedError


class SimulatedNotifier(Notifier):
    """Pretends to deliver; the log row is the only side effect."""

    def send(self, project):
        client = project.client
        recipient = self.resolve_recipient(client) or client.email
        logger.info(f'SIMULATED {self.channel} delivery for project {project.id} to {recipient}')
        return NotificationResult(
            success=True,
            recipient=recipient,
            message=f'Password sent via {self.label} to {recipient} (SIMULATED)',
        )


class SimulatedEmailNotifier(SimulatedNotifier):
    channel = 'email'
    label = 'email'

    def resolve_recipient(self, client):
        return client.email


class SimulatedSMSNotifier(SimulatedNotifier):
    channel = 'sms'
    label = 'SMS'

    def resolve_recipient(self, client):
        return client.phone


class SimulatedWhatsAppNotifier(SimulatedNotifier):
    channel = 'whatsapp'
    label = 'WhatsApp'

    def resolve_recipient(self, client):
        return client.whatsapp or client.phone


@lru_cache(maxsize=None)
def _load(paths):
    return tuple(import_string(path)() for path in paths)


def get_notifiers():
    return _load(tuple(settings.DELIVERY_NOTIFIERS))
