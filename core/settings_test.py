"""
Settings used by the pytest suite.

Fills in the environment the production settings insist on, then swaps
external services for in-process ones.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')
os.environ.setdefault('DEBUG', 'True')

from core.settings import *  # noqa: E402,F401,F403

ALLOWED_HOSTS = ['testserver', 'localhost', '127.0.0.1', 'suwityarat.me']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

ADMIN_PIN = '4321'
ANALYTICS_ATOMIC_COUNTERS = False

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
