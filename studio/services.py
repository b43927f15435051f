"""
Studio services - client portal credentials and project creation.
"""

import logging
import secrets
from decimal import Decimal, InvalidOperation

from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from studio.models import Client, Project

logger = logging.getLogger(__name__)

PROJECT_PASSWORD_LENGTH = 12
_PASSWORD_ATTEMPTS = 5


def generate_project_password():
    """12 URL-safe characters from the OS CSPRNG (9 random bytes, base64url)."""
    return secrets.token_urlsafe(9)[:PROJECT_PASSWORD_LENGTH]


def _clean_price(price):
    try:
        value = Decimal(str(price))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError({'price': ['Price must be a number']})
    if not value.is_finite() or value <= 0:
        raise ValidationError({'price': ['Price must be greater than zero']})
    return value.quantize(Decimal('0.01'))


def create_project(client, name, content_link, price):
    """
    Create a pending project with a fresh unlock password.

    Raises ValidationError when a required field is missing or price <= 0.
    """
    missing = [
        field for field, value in (
            ('client', client), ('name', name), ('content_link', content_link), ('price', price),
        ) if value in (None, '')
    ]
    if missing:
        raise ValidationError({field: ['This field is required.'] for field in missing})

    price = _clean_price(price)

    for attempt in range(_PASSWORD_ATTEMPTS):
        try:
            with transaction.atomic():
                project = Project.objects.create(
                    client=client,
                    name=name,
                    content_link=content_link,
                    price=price,
                    password=generate_project_password(),
                    status=Project.STATUS_PENDING,
                )
        except IntegrityError:
            logger.warning(f'Project password collision for client {client.id} (attempt {attempt + 1})')
            continue
        logger.info(f'Project {project.id} created for client {client.id} at {price}')
        return project

    raise IntegrityError('Could not generate a unique project password')


def set_portal_password(client, raw_password):
    """Set (or with None/'' clear) the client's portal login password."""
    client.password = make_password(raw_password) if raw_password else None
    client.save(update_fields=['password', 'updated_at'])
    logger.info(f'Portal access {"granted" if client.password else "revoked"} for client {client.id}')
    return client


def normalize_email(email):
    """Client emails are stored lowercased; login matches them case-insensitively."""
    return email.strip().lower() if email else email


def create_client(name, email, phone=None, whatsapp=None, portal_password=None):
    client = Client.objects.create(
        name=name,
        email=normalize_email(email),
        phone=phone or None,
        whatsapp=whatsapp or None,
        password=make_password(portal_password) if portal_password else None,
    )
    logger.info(f'Client {client.id} created')
    return client
