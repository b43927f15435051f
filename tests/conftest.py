import pytest
from decimal import Decimal
from django.core.cache import cache
from faker import Faker
from rest_framework.test import APIClient

from accounts.authentication import ROLE_ADMIN, ROLE_CLIENT, issue_session_token
from accounts.models import StudioUser
from studio.services import create_client, create_project

# Initialize Faker for generating test data
fake = Faker()

ADMIN_PASSWORD = 'demo123'
CLIENT_PASSWORD = 'portal-pass-1'


def pytest_configure(config):
    config.addinivalue_line("markers", "auth: mark test as authentication-related")
    config.addinivalue_line("markers", "payment: mark test as payment-related")


@pytest.fixture(autouse=True)
def clear_cache():
    """Throttle counters and revoked tokens live in the cache; start each test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return StudioUser.objects.create_superuser(
        email='admin@kingkidd.com', password=ADMIN_PASSWORD, name='Admin User',
    )


@pytest.fixture
def studio_client(db):
    """A client with portal access enabled."""
    return create_client(
        name=fake.name(),
        email=fake.unique.email(),
        phone='+254712345678',
        whatsapp='+254712345678',
        portal_password=CLIENT_PASSWORD,
    )


@pytest.fixture
def other_client(db):
    return create_client(
        name=fake.name(),
        email=fake.unique.email(),
        phone='+254723456789',
        portal_password=CLIENT_PASSWORD,
    )


@pytest.fixture
def project(studio_client):
    return create_project(
        client=studio_client,
        name='Wedding Photo Album',
        content_link='https://drive.google.com/albums/wedding-2024',
        price=Decimal('15000.00'),
    )


@pytest.fixture
def admin_api(api_client, admin_user):
    token = issue_session_token(admin_user, ROLE_ADMIN)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return api_client


@pytest.fixture
def client_api(studio_client):
    api = APIClient()
    token = issue_session_token(studio_client, ROLE_CLIENT)
    api.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return api
