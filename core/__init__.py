"""
Portfolio backend project package.

Loads the Celery app on Django start so shared tasks bind to it.
"""
from .celery import app as celery_app

__all__ = ('celery_app',)
