"""
Celery tasks for the accounts app.
"""

import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='accounts.tasks.prune_otp_verifications', bind=True, max_retries=0, ignore_result=True)
def prune_otp_verifications(self):
    """Delete one-time codes that were consumed or expired beyond the retention window."""
    from accounts.otp_service import prune_stale_otps

    deleted = prune_stale_otps()
    if deleted:
        logger.info(f'OTP prune completed: {deleted} record(s) removed')
    return deleted
