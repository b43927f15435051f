import pytest
from decimal import Decimal
from rest_framework.exceptions import ValidationError

from delivery.models import DeliveryLog
from payments.models import Payment
from payments.services import (
    PaymentAlreadyConfirmed, confirm_checkout, generate_transaction_ref, initiate_payment,
    normalize_phone, simulate_payment, validate_mpesa_number,
)
from studio.models import Client, Project
from studio.services import create_project

pytestmark = [pytest.mark.django_db, pytest.mark.payment]


def test_transaction_ref_format():
    ref = generate_transaction_ref()
    assert ref.startswith('TXN')
    assert len(ref) == 13


@pytest.mark.parametrize('raw,expected', [
    ('0712345678', '+254712345678'),
    ('254712345678', '+254712345678'),
    ('+254 712 345 678', '+254712345678'),
    ('', ''),
    ('abc', ''),
    ('+ -', ''),
])
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_validate_mpesa_number():
    assert validate_mpesa_number('0712345678')
    assert validate_mpesa_number('+254112345678')
    assert not validate_mpesa_number('+25471234')


def test_simulate_payment_confirms_and_delivers():
    client = Client.objects.create(name='A', email='a@x.com')
    project = create_project(client, 'P1', 'https://example.com/p1', Decimal('1000'))

    payment = simulate_payment(project, 'mpesa')

    project.refresh_from_db()
    assert project.status == Project.STATUS_DELIVERED
    assert payment.status == Payment.STATUS_CONFIRMED
    assert payment.amount == Decimal('1000.00')
    assert payment.transaction_ref.startswith('TXN')
    assert payment.confirmed_at is not None
    assert Payment.objects.filter(project=project).count() == 1

    logs = DeliveryLog.objects.filter(project=project)
    assert sorted(logs.values_list('method', flat=True)) == ['email', 'sms', 'whatsapp']
    assert all(log.status == DeliveryLog.STATUS_SENT for log in logs)


def test_simulate_payment_twice_is_refused(project):
    simulate_payment(project, 'card')
    with pytest.raises(PaymentAlreadyConfirmed):
        simulate_payment(project, 'card')
    assert Payment.objects.filter(project=project).count() == 1
    assert DeliveryLog.objects.filter(project=project).count() == 3


def test_simulate_payment_rejects_unknown_method(project):
    with pytest.raises(ValidationError):
        simulate_payment(project, 'bitcoin')
    assert not Payment.objects.exists()


def test_initiate_payment_creates_pending_row(project):
    payment = initiate_payment(project, 'mpesa', phone_number='0712345678')
    assert payment.status == Payment.STATUS_PENDING
    assert payment.amount == project.price
    assert payment.phone_number == '+254712345678'
    assert payment.transaction_ref is None

    project.refresh_from_db()
    assert project.status == Project.STATUS_PENDING


def test_initiate_payment_rejects_bad_mpesa_number(project):
    with pytest.raises(ValidationError):
        initiate_payment(project, 'mpesa', phone_number='12345')


def test_initiate_payment_drops_junk_phone_for_card(project):
    payment = initiate_payment(project, 'card', phone_number='abc')
    assert payment.phone_number == ''


def test_confirm_checkout_unlocks_project(project):
    payment = initiate_payment(project, 'card')
    payment = confirm_checkout(payment, delay=0)

    project.refresh_from_db()
    assert payment.status == Payment.STATUS_CONFIRMED
    assert project.status == Project.STATUS_DELIVERED
    assert DeliveryLog.objects.filter(project=project, status=DeliveryLog.STATUS_SENT).count() == 3


def test_confirm_checkout_twice_is_refused(project):
    payment = initiate_payment(project, 'card')
    confirm_checkout(payment, delay=0)
    with pytest.raises(PaymentAlreadyConfirmed):
        confirm_checkout(payment, delay=0)
    assert Payment.objects.filter(status=Payment.STATUS_CONFIRMED).count() == 1


def test_second_pending_payment_cannot_confirm_paid_project(project):
    first = initiate_payment(project, 'card')
    second = initiate_payment(project, 'bank')
    confirm_checkout(first, delay=0)

    with pytest.raises(PaymentAlreadyConfirmed):
        confirm_checkout(second, delay=0)
    second.refresh_from_db()
    assert second.status == Payment.STATUS_PENDING


def test_confirm_checkout_waits_for_simulated_gateway(project, monkeypatch):
    slept = []
    monkeypatch.setattr('payments.services.time.sleep', slept.append)
    payment = initiate_payment(project, 'paypal')

    confirm_checkout(payment, delay=2.5)
    assert slept == [2.5]


# ==================== Rollback ====================

class ExplodingNotifier:
    channel = 'email'

    def send(self, project):
        raise RuntimeError('template engine crashed')


@pytest.fixture
def exploding_delivery(settings):
    settings.DELIVERY_NOTIFIERS = ['tests.test_payments.ExplodingNotifier']


def test_simulate_payment_rolls_back_when_delivery_crashes(project, exploding_delivery):
    with pytest.raises(RuntimeError):
        simulate_payment(project, 'mpesa')

    project.refresh_from_db()
    assert project.status == Project.STATUS_PENDING
    assert not Payment.objects.exists()
    assert not DeliveryLog.objects.exists()


def test_confirm_checkout_rolls_back_when_delivery_crashes(project, exploding_delivery, settings):
    payment = initiate_payment(project, 'card')

    with pytest.raises(RuntimeError):
        confirm_checkout(payment, delay=0)

    payment.refresh_from_db()
    project.refresh_from_db()
    assert payment.status == Payment.STATUS_PENDING
    assert payment.transaction_ref is None
    assert project.status == Project.STATUS_PENDING
    assert not DeliveryLog.objects.exists()

    # the same checkout can still go through once delivery works again
    settings.DELIVERY_NOTIFIERS = ['delivery.notifiers.SimulatedEmailNotifier']
    confirm_checkout(payment, delay=0)
    project.refresh_from_db()
    assert project.status == Project.STATUS_DELIVERED


def test_portal_confirm_returns_500_and_keeps_project_locked(client_api, project, exploding_delivery):
    payment = initiate_payment(project, 'card')

    resp = client_api.post('/api/portal/payments/confirm/', {'payment_id': str(payment.id)}, format='json')
    assert resp.status_code == 500
    assert resp.data == {'error': 'Internal server error'}

    project.refresh_from_db()
    assert project.status == Project.STATUS_PENDING
    assert not Payment.objects.filter(status=Payment.STATUS_CONFIRMED).exists()
