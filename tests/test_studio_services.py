import re
from decimal import Decimal

import pytest
from django.contrib.auth.hashers import check_password
from faker import Faker
from rest_framework.exceptions import ValidationError

from studio.models import Project
from studio.services import (
    PROJECT_PASSWORD_LENGTH, create_client, create_project, generate_project_password, set_portal_password,
)

fake = Faker()


def test_generated_password_is_twelve_url_safe_chars():
    password = generate_project_password()
    assert len(password) == PROJECT_PASSWORD_LENGTH == 12
    assert re.fullmatch(r'[A-Za-z0-9_-]{12}', password)


def test_generated_passwords_do_not_repeat():
    passwords = {generate_project_password() for _ in range(500)}
    assert len(passwords) == 500


@pytest.mark.django_db
def test_create_project_starts_pending(studio_client):
    project = create_project(
        client=studio_client,
        name='P1',
        content_link='https://example.com/albums/p1',
        price='1000',
    )
    assert project.status == Project.STATUS_PENDING
    assert project.price == Decimal('1000.00')
    assert len(project.password) == 12


@pytest.mark.django_db
@pytest.mark.parametrize('price', [0, '-5', 'abc'])
def test_create_project_rejects_bad_price(studio_client, price):
    with pytest.raises(ValidationError):
        create_project(studio_client, 'P1', 'https://example.com/a', price)
    assert not Project.objects.exists()


@pytest.mark.django_db
def test_create_project_requires_fields(studio_client):
    with pytest.raises(ValidationError) as exc:
        create_project(studio_client, '', 'https://example.com/a', '100')
    assert 'name' in exc.value.detail


@pytest.mark.django_db
def test_create_project_retries_password_collision(studio_client, monkeypatch):
    existing = create_project(studio_client, 'P1', 'https://example.com/a', '100')
    candidates = iter([existing.password, 'fresh-pass-01'])
    monkeypatch.setattr('studio.services.generate_project_password', lambda: next(candidates))

    project = create_project(studio_client, 'P2', 'https://example.com/b', '200')
    assert project.password == 'fresh-pass-01'


@pytest.mark.django_db
def test_portal_password_is_hashed_and_clearable():
    client = create_client(name=fake.name(), email=fake.unique.email())
    assert not client.has_portal_access

    set_portal_password(client, 'secret-123')
    client.refresh_from_db()
    assert client.password != 'secret-123'
    assert check_password('secret-123', client.password)

    set_portal_password(client, None)
    client.refresh_from_db()
    assert client.password is None
