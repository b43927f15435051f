"""
OTP Service - issues and verifies 6-digit one-time codes.

Codes are stored per request and matched on code + contact. In demo mode the
code is handed back to the caller instead of travelling over SMS or email.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.db.models import Q
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError

from accounts.models import OTPVerification

logger = logging.getLogger(__name__)

_DEFAULT_OTP_EXPIRY_MINUTES = 5


class OTPError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCode(OTPError):
    default_detail = 'Invalid OTP code'
    default_code = 'invalid_code'


class Expired(OTPError):
    default_detail = 'OTP has expired'
    default_code = 'expired'


def mask_contact(contact):
    """Hide all but the edges of an email or phone for log lines."""
    if not contact:
        return ''
    if '@' in contact:
        local, _, domain = contact.partition('@')
        return f'{local[:1]}***@{domain}'
    return f'{contact[:6]}***'


def issue_otp(email=None, phone=None, purpose='login'):
    """
    Create a fresh code for an email or phone.

    Returns:
        OTPVerification: the stored record (its code is what the caller sends on).
    """
    if not email and not phone:
        raise ValidationError({'contact': ['Email or phone is required']})

    expiry_minutes = getattr(settings, 'OTP_EXPIRY_MINUTES', _DEFAULT_OTP_EXPIRY_MINUTES)
    otp = OTPVerification.objects.create(
        email=email or None,
        phone=phone or None,
        code=OTPVerification.generate_code(),
        type=purpose or 'login',
        expires_at=timezone.now() + timedelta(minutes=expiry_minutes),
    )

    contact = mask_contact(email or phone)
    if settings.DEMO_MODE:
        logger.info(f'DEMO MODE - OTP {otp.code} issued for {contact} (type={otp.type}, expiry={expiry_minutes}m)')
    else:
        logger.info(f'OTP issued for {contact} (type={otp.type}, expiry={expiry_minutes}m)')
    return otp


def verify_otp(code, email=None, phone=None):
    """
    Consume the most recent unverified code for the contact.

    Raises InvalidCode when nothing matches and Expired when the match is
    past its expiry. Returns the now-verified record.
    """
    if not code or (not email and not phone):
        raise ValidationError({'code': ['Code and email/phone are required']})

    contact_filter = Q()
    if email:
        contact_filter |= Q(email=email)
    if phone:
        contact_filter |= Q(phone=phone)

    otp = OTPVerification.objects.filter(
        contact_filter, code=code, verified=False
    ).order_by('-created_at').first()

    contact = mask_contact(email or phone)
    if not otp:
        logger.info(f'OTP verification failed for {contact}: no matching code')
        raise InvalidCode()

    if timezone.now() > otp.expires_at:
        logger.info(f'OTP verification failed for {contact}: code expired')
        raise Expired()

    otp.verified = True
    otp.save(update_fields=['verified'])
    logger.info(f'OTP verified for {contact}')
    return otp


def prune_stale_otps(retention_hours=None):
    """Delete codes that were used or expired longer ago than the retention window."""
    if retention_hours is None:
        retention_hours = settings.OTP_RETENTION_HOURS
    cutoff = timezone.now() - timedelta(hours=retention_hours)
    deleted, _ = OTPVerification.objects.filter(
        Q(verified=True, created_at__lt=cutoff) | Q(expires_at__lt=cutoff)
    ).delete()
    return deleted
