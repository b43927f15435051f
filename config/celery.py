"""
ShutterDesk Celery Configuration
Periodic housekeeping only; request handling never waits on a worker.
"""

import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('shutterdesk')
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.task_default_queue = 'default'

app.conf.task_routes = {
    'accounts.*': {'queue': 'default'},
}

app.autodiscover_tasks()

# Celery Beat Schedule
from celery.schedules import crontab

app.conf.beat_schedule = {
    # Drop spent and expired one-time codes daily at 3 AM
    'prune-otp-verifications': {
        'task': 'accounts.tasks.prune_otp_verifications',
        'schedule': crontab(hour=3, minute=0),
    },
}
