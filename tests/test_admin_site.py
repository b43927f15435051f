import re

import pytest

from studio.models import Project

pytestmark = pytest.mark.django_db

ADD_URL = '/admin/studio/project/add/'


@pytest.fixture
def staff_client(client, admin_user):
    client.force_login(admin_user)
    return client


def _project_form(studio_client, **overrides):
    data = {
        'client': str(studio_client.id),
        'name': 'Engagement Shoot',
        'content_link': 'https://drive.google.com/albums/engagement',
        'price': '4500.00',
    }
    data.update(overrides)
    return data


def test_admin_add_generates_unique_password(staff_client, studio_client):
    for name in ('Engagement Shoot', 'Baby Shower'):
        resp = staff_client.post(ADD_URL, _project_form(studio_client, name=name))
        assert resp.status_code == 302

    passwords = list(Project.objects.values_list('password', flat=True))
    assert len(passwords) == 2
    assert len(set(passwords)) == 2
    assert all(re.fullmatch(r'[A-Za-z0-9_-]{12}', p) for p in passwords)
    assert set(Project.objects.values_list('status', flat=True)) == {Project.STATUS_PENDING}


@pytest.mark.parametrize('price', ['0', '-1'])
def test_admin_add_rejects_non_positive_price(staff_client, studio_client, price):
    resp = staff_client.post(ADD_URL, _project_form(studio_client, price=price))
    assert resp.status_code == 200
    assert 'Price must be greater than zero' in resp.content.decode()
    assert not Project.objects.exists()


def test_admin_cannot_reprice_paid_project(staff_client, project):
    project.status = Project.STATUS_PAID
    project.save()

    resp = staff_client.post(
        f'/admin/studio/project/{project.id}/change/',
        _project_form(project.client, name=project.name, price='1.00'),
    )
    assert resp.status_code == 200
    project.refresh_from_db()
    assert project.price != 1


def test_client_inline_is_read_only(staff_client, project):
    resp = staff_client.get(f'/admin/studio/client/{project.client_id}/change/')
    assert resp.status_code == 200
    html = resp.content.decode()
    assert project.name in html
    assert 'name="projects-0-price"' not in html
    assert 'name="projects-__prefix__-name"' not in html
