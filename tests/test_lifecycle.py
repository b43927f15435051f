import pytest

from studio.lifecycle import InvalidTransition, advance, can_advance, next_status
from studio.models import Project


def test_next_status_only_moves_forward():
    assert next_status(Project.STATUS_PENDING) == Project.STATUS_PAID
    assert next_status(Project.STATUS_PAID) == Project.STATUS_DELIVERED
    assert next_status(Project.STATUS_DELIVERED) is None


@pytest.mark.django_db
def test_advance_pending_to_paid(project):
    advance(project, Project.STATUS_PAID)
    project.refresh_from_db()
    assert project.status == Project.STATUS_PAID
    assert project.is_unlocked


@pytest.mark.django_db
def test_advance_rejects_skipping_a_step(project):
    assert not can_advance(project, Project.STATUS_DELIVERED)
    with pytest.raises(InvalidTransition):
        advance(project, Project.STATUS_DELIVERED)
    project.refresh_from_db()
    assert project.status == Project.STATUS_PENDING


@pytest.mark.django_db
def test_advance_rejects_going_backwards(project):
    advance(project, Project.STATUS_PAID)
    advance(project, Project.STATUS_DELIVERED)
    for target in (Project.STATUS_PENDING, Project.STATUS_PAID, Project.STATUS_DELIVERED):
        with pytest.raises(InvalidTransition):
            advance(project, target)
    project.refresh_from_db()
    assert project.status == Project.STATUS_DELIVERED
