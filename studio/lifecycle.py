"""
Project lifecycle: pending -> paid -> delivered.

Status only ever moves one step forward. Callers that need the move to be
race-free hold the project row lock (select_for_update) while calling advance().
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException

from studio.models import Project

logger = logging.getLogger(__name__)

TRANSITIONS = {
    Project.STATUS_PENDING: Project.STATUS_PAID,
    Project.STATUS_PAID: Project.STATUS_DELIVERED,
}


class InvalidTransition(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Project cannot move to that status'
    default_code = 'invalid_transition'


def next_status(current):
    return TRANSITIONS.get(current)


def can_advance(project, new_status):
    return next_status(project.status) == new_status


def advance(project, new_status):
    """Move `project` to `new_status` if that is its single legal next step."""
    if not can_advance(project, new_status):
        raise InvalidTransition(f'Project {project.id} cannot move from {project.status} to {new_status}')

    previous = project.status
    project.status = new_status
    project.save(update_fields=['status', 'updated_at'])
    logger.info(f'Project {project.id} advanced {previous} -> {new_status}')
    return project
