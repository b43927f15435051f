"""
Settings for the pytest suite: in-memory SQLite, local cache, no gateway delay.
"""

from config.settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

JWT_SECRET_KEY = 'test-jwt-secret-key-with-at-least-32-bytes'
DEMO_MODE = True
PAYMENT_SIMULATION_DELAY_SECONDS = 0
ADMIN_DOMAIN = ''

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
