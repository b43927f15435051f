from datetime import timedelta

import pytest
from django.utils import timezone

from accounts.models import OTPVerification
from accounts.otp_service import issue_otp
from accounts.tasks import prune_otp_verifications
from config.celery import app

pytestmark = pytest.mark.django_db


def test_prune_task_removes_stale_codes():
    stale = issue_otp(email='old@x.com')
    fresh = issue_otp(email='new@x.com')
    long_ago = timezone.now() - timedelta(days=3)
    OTPVerification.objects.filter(pk=stale.pk).update(created_at=long_ago, expires_at=long_ago)

    assert prune_otp_verifications.delay().get() == 1
    assert list(OTPVerification.objects.values_list('pk', flat=True)) == [fresh.pk]


def test_prune_task_is_scheduled():
    schedule = app.conf.beat_schedule
    assert schedule['prune-otp-verifications']['task'] == 'accounts.tasks.prune_otp_verifications'
