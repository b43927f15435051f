"""
Password delivery: run every notifier, log each attempt, mark the project delivered.
"""

import logging

from django.db import transaction

from delivery.models import DeliveryLog
from delivery.notifiers import NotificationError, get_notifiers
from studio.lifecycle import InvalidTransition, advance
from studio.models import Project

logger = logging.getLogger(__name__)


def deliver_passwords(project):
    """
    Send the project's password over every configured channel.

    A paid project becomes delivered once at least one channel succeeds; a
    delivered project may be re-sent and stays delivered. Pending projects
    raise InvalidTransition. Returns the DeliveryLog rows written.
    """
    if not project.is_unlocked:
        raise InvalidTransition(f'Project {project.id} is {project.status}; nothing to deliver before payment')

    logs = []
    with transaction.atomic():
        for notifier in get_notifiers():
            try:
                result = notifier.send(project)
            except NotificationError as e:
                logger.warning(f'{notifier.channel} delivery failed for project {project.id}: {e}')
                logs.append(DeliveryLog.objects.create(
                    project=project,
                    method=notifier.channel,
                    status=DeliveryLog.STATUS_FAILED,
                    recipient=notifier.resolve_recipient(project.client) or '',
                    message=str(e),
                ))
                continue

            logs.append(DeliveryLog.objects.create(
                project=project,
                method=notifier.channel,
                status=DeliveryLog.STATUS_SENT if result.success else DeliveryLog.STATUS_FAILED,
                recipient=result.recipient or '',
                message=result.message,
            ))

        sent = [log for log in logs if log.status == DeliveryLog.STATUS_SENT]
        if sent and project.status == Project.STATUS_PAID:
            advance(project, Project.STATUS_DELIVERED)

    if not sent:
        logger.error(f'All delivery channels failed for project {project.id}')
    else:
        logger.info(f'Project {project.id} password delivered on {len(sent)}/{len(logs)} channel(s)')
    return logs


def redeliver(project_id):
    """Admin-triggered (re)send, holding the project row lock."""
    with transaction.atomic():
        project = Project.objects.select_for_update().select_related('client').get(pk=project_id)
        logs = deliver_passwords(project)
    return project, logs
