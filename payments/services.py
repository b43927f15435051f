"""
ShutterDesk Payment Services
Simulated gateway: confirmation is a delay plus database writes. No money moves.

Two entry points confirm a project:
- simulate_payment: admin quick-simulate, confirms and delivers at once.
- initiate_payment + confirm_checkout: client portal checkout.
Both confirm and deliver inside one transaction with the project row locked,
and both leave the project delivered.
"""

import re
import time
import secrets
import string
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError

from payments.models import Payment
from studio.lifecycle import advance
from studio.models import Project

logger = logging.getLogger(__name__)

_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


class PaymentAlreadyConfirmed(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Payment has already been confirmed for this project'
    default_code = 'payment_already_confirmed'


# ==================== Utilities ====================

def generate_transaction_ref():
    """Synthetic gateway reference, e.g. TXN4K2J9QX0ZP."""
    suffix = ''.join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(10))
    return f'{settings.PAYMENT_REFERENCE_PREFIX}{suffix}'


def normalize_phone(phone):
    """Normalize an M-Pesa number to +254XXXXXXXXX. Returns '' when the input has no digits."""
    if not phone:
        return ''
    digits = re.sub(r'\D', '', phone)
    if not digits:
        return ''
    if digits.startswith('0') and len(digits) == 10:
        return '+254' + digits[1:]
    return '+' + digits


def validate_mpesa_number(phone):
    """Kenyan Safaricom/Airtel mobile numbers: +2547XXXXXXXX or +2541XXXXXXXX."""
    return re.match(r'^\+254[17]\d{8}$', normalize_phone(phone)) is not None


def validate_method(method):
    if method not in Payment.method_codes():
        raise ValidationError({'method': [f'Unsupported payment method: {method}']})
    return method


def _lock_pending_project(project_id):
    project = Project.objects.select_for_update().select_related('client').get(pk=project_id)
    if project.status != Project.STATUS_PENDING:
        logger.warning(f'Confirmation refused for project {project.id}: status is {project.status}')
        raise PaymentAlreadyConfirmed()
    return project


def _confirm(payment, project):
    payment.status = Payment.STATUS_CONFIRMED
    payment.transaction_ref = generate_transaction_ref()
    payment.confirmed_at = timezone.now()
    payment.save(update_fields=['status', 'transaction_ref', 'confirmed_at'])
    advance(project, Project.STATUS_PAID)
    logger.info(f'Payment {payment.id} confirmed for project {project.id}: ref={payment.transaction_ref}')
    return payment


# ==================== Admin quick-simulate ====================

def simulate_payment(project, method):
    """
    Record a confirmed payment for a pending project and deliver its password.
    Raises PaymentAlreadyConfirmed when the project is no longer pending.
    """
    from delivery.services import deliver_passwords

    validate_method(method)

    with transaction.atomic():
        project = _lock_pending_project(project.pk)
        payment = Payment(project=project, amount=project.price, method=method)
        payment.save()
        _confirm(payment, project)
        deliver_passwords(project)

    return payment


# ==================== Client checkout ====================

def initiate_payment(project, method, phone_number=None):
    """Open a pending payment for the project's full price."""
    validate_method(method)

    phone_number = normalize_phone(phone_number)
    if method == 'mpesa' and phone_number and not validate_mpesa_number(phone_number):
        raise ValidationError({'phone_number': ['Invalid M-Pesa phone number']})

    if project.status != Project.STATUS_PENDING:
        raise PaymentAlreadyConfirmed()

    payment = Payment.objects.create(
        project=project,
        amount=project.price,
        method=method,
        phone_number=phone_number,
        status=Payment.STATUS_PENDING,
    )
    logger.info(f'Payment {payment.id} initiated for project {project.id} via {method}')
    return payment


def confirm_checkout(payment, delay=None):
    """
    Simulate the gateway round-trip, then confirm the payment and deliver.

    The delay is taken before the transaction opens so no lock is held while
    waiting.
    """
    from delivery.services import deliver_passwords

    if delay is None:
        delay = settings.PAYMENT_SIMULATION_DELAY_SECONDS
    if delay > 0:
        time.sleep(delay)

    with transaction.atomic():
        project = _lock_pending_project(payment.project_id)
        payment = Payment.objects.select_for_update().get(pk=payment.pk)
        if payment.status == Payment.STATUS_CONFIRMED:
            raise PaymentAlreadyConfirmed()
        _confirm(payment, project)
        deliver_passwords(project)

    return payment
