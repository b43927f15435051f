import uuid

import pytest
from rest_framework.test import APIClient

from accounts.authentication import ROLE_CLIENT, issue_session_token
from payments.models import Payment
from payments.services import initiate_payment
from studio.models import Project
from studio.services import create_project

pytestmark = [pytest.mark.django_db, pytest.mark.payment]

BASE = '/api/portal'


def client_api_for(client):
    api = APIClient()
    api.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_session_token(client, ROLE_CLIENT)}')
    return api


def test_portal_lists_only_own_projects(client_api, project, other_client):
    create_project(other_client, 'Not yours', 'https://example.com/x', '100')

    resp = client_api.get(f'{BASE}/projects/')
    assert resp.status_code == 200
    assert [p['id'] for p in resp.data['projects']] == [str(project.id)]
    assert resp.data['summary'] == {'total': 1, 'unlocked': 0, 'pending': 1}


def test_locked_project_hides_link_and_password(client_api, project):
    data = client_api.get(f'{BASE}/projects/').data['projects'][0]
    assert data['is_unlocked'] is False
    assert data['content_link'] is None
    assert data['password'] is None
    assert data['last_payment'] is None


def test_checkout_unlocks_project(client_api, project):
    resp = client_api.post(f'{BASE}/payments/initiate/', {
        'project_id': str(project.id), 'method': 'mpesa', 'phone_number': '0712345678',
    }, format='json')
    assert resp.status_code == 201
    payment_id = resp.data['payment_id']

    resp = client_api.post(f'{BASE}/payments/confirm/', {'payment_id': payment_id}, format='json')
    assert resp.status_code == 200
    assert resp.data['payment']['status'] == 'confirmed'
    assert resp.data['project']['status'] == 'delivered'
    assert resp.data['project']['password'] == project.password
    assert resp.data['project']['content_link'] == project.content_link

    data = client_api.get(f'{BASE}/projects/').data['projects'][0]
    assert data['is_unlocked'] is True
    assert data['last_payment']['transaction_ref'].startswith('TXN')


def test_confirm_twice_conflicts(client_api, project):
    payment = initiate_payment(project, 'card')
    client_api.post(f'{BASE}/payments/confirm/', {'payment_id': str(payment.id)}, format='json')

    resp = client_api.post(f'{BASE}/payments/confirm/', {'payment_id': str(payment.id)}, format='json')
    assert resp.status_code == 409
    assert Payment.objects.filter(status=Payment.STATUS_CONFIRMED).count() == 1


def test_initiate_on_paid_project_conflicts(client_api, project):
    payment = initiate_payment(project, 'card')
    client_api.post(f'{BASE}/payments/confirm/', {'payment_id': str(payment.id)}, format='json')

    resp = client_api.post(f'{BASE}/payments/initiate/', {'project_id': str(project.id), 'method': 'card'}, format='json')
    assert resp.status_code == 409


def test_cannot_pay_for_another_clients_project(other_client, project):
    api = client_api_for(other_client)
    resp = api.post(f'{BASE}/payments/initiate/', {'project_id': str(project.id), 'method': 'card'}, format='json')
    assert resp.status_code == 403
    assert not Payment.objects.exists()


def test_cannot_confirm_another_clients_payment(other_client, project):
    payment = initiate_payment(project, 'card')
    api = client_api_for(other_client)

    resp = api.post(f'{BASE}/payments/confirm/', {'payment_id': str(payment.id)}, format='json')
    assert resp.status_code == 403
    project.refresh_from_db()
    assert project.status == Project.STATUS_PENDING


def test_unknown_ids_are_404(client_api):
    resp = client_api.post(f'{BASE}/payments/initiate/', {'project_id': str(uuid.uuid4()), 'method': 'card'}, format='json')
    assert resp.status_code == 404
    resp = client_api.post(f'{BASE}/payments/confirm/', {'payment_id': str(uuid.uuid4())}, format='json')
    assert resp.status_code == 404


def test_invalid_mpesa_number(client_api, project):
    resp = client_api.post(f'{BASE}/payments/initiate/', {
        'project_id': str(project.id), 'method': 'mpesa', 'phone_number': '555',
    }, format='json')
    assert resp.status_code == 400
    assert 'phone_number' in resp.data['details']


def test_portal_requires_login(api_client):
    assert api_client.get(f'{BASE}/projects/').status_code == 401
