"""
Celery configuration for the portfolio backend.

The broker doubles as the contact message queue: the contact endpoint
publishes one task per submission and the worker sends the email.

Delivery is at-least-once:
- tasks are acknowledged only after they finish (task_acks_late)
- a task whose worker dies is redelivered (task_reject_on_worker_lost)
- failed sends are retried by the task itself with a doubling countdown
"""
import os
from celery import Celery

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

# Create Celery app
app = Celery('core')

# Load config from Django settings with CELERY_ prefix
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()

# Celery configuration
app.conf.update(
    # Task result expiry
    result_expires=3600,  # 1 hour

    # Task time limits
    task_time_limit=120,  # 2 minutes hard limit
    task_soft_time_limit=90,

    # Retry policy
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Prefetch multiplier (1 = fair distribution)
    worker_prefetch_multiplier=1,

    # Serialization
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],

    # Timezone
    timezone='UTC',
    enable_utc=True,
)
