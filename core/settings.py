"""
Django settings for the portfolio backend.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/topics/settings/

For the full list of settings and their values, see
https://docs.djangoproject.com/en/5.2/ref/settings/
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
env_file = os.path.join(BASE_DIR, '.env.development')
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    load_dotenv()  # Try default .env


# SECURITY WARNING: keep the secret key used in production secret!
# SECRET_KEY MUST be set in environment
SECRET_KEY = os.getenv('SECRET_KEY')
if not SECRET_KEY:
    raise ValueError(
        "SECRET_KEY environment variable is not set. "
        "Please add SECRET_KEY to your .env file. "
        "For development, you can generate one with: "
        "python -c 'from django.core.management.utils import get_random_secret_key; print(get_random_secret_key())'"
    )

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'True') == 'True'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# Site name shown in notification emails
SITE_NAME = os.getenv('SITE_NAME', 'suwityarat.me')


# =============================================================================
# REDIS (key-value store for analytics and saved applications)
# =============================================================================

REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/1')

# Dedicated database for the key-value namespaces (analytics:*, application:*)
KV_REDIS_URL = os.getenv('KV_REDIS_URL', REDIS_URL)

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'portfolio-default',
    }
}


# =============================================================================
# CELERY CONFIGURATION (contact message queue)
# =============================================================================

CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', 'redis://localhost:6379/0')
CELERY_TASK_ALWAYS_EAGER = os.getenv('CELERY_TASK_ALWAYS_EAGER', 'False') == 'True'


# Application definition

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.staticfiles',

    # Third-party apps
    'rest_framework',
    'corsheaders',

    # Local apps
    'accounts',
    'analytics',
    'applications',
    'contact',
    'cms',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',  # CORS before CommonMiddleware
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'analytics.middleware.AnalyticsSessionMiddleware',
]

ROOT_URLCONF = 'core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'core.wsgi.application'


# Database
# No models are stored relationally; the database only backs Django internals.

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / os.getenv('DB_NAME', 'db.sqlite3'),
    }
}


# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / os.getenv('STATIC_ROOT', 'staticfiles')

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# =============================================================================
# REST FRAMEWORK SETTINGS
# =============================================================================

REST_FRAMEWORK = {
    # Access control is cookie based (see accounts.permissions), no user auth.
    'DEFAULT_AUTHENTICATION_CLASSES': (),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.AllowAny',
    ),
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PARSER_CLASSES': (
        'rest_framework.parsers.JSONParser',
    ),
    'EXCEPTION_HANDLER': 'core.exceptions.api_exception_handler',
}


# =============================================================================
# CORS SETTINGS
# =============================================================================

if DEBUG:
    # Development: Allow all origins for easier testing
    CORS_ORIGIN_ALLOW_ALL = True
else:
    # Production: Whitelist specific frontend origins
    cors_origins_env = os.getenv(
        'CORS_ALLOWED_ORIGINS',
        'https://suwityarat.me'
    )
    CORS_ALLOWED_ORIGINS = [origin.strip() for origin in cors_origins_env.split(',')]

CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = [
    'DELETE',
    'GET',
    'OPTIONS',
    'POST',
    'PUT',
]


# =============================================================================
# EMAIL SETTINGS
# =============================================================================

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = os.getenv('EMAIL_HOST', 'localhost')
EMAIL_PORT = int(os.getenv('EMAIL_PORT', 587))
EMAIL_USE_TLS = os.getenv('EMAIL_USE_TLS', 'True') == 'True'
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD', '')
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', 'noreply@suwityarat.me')
EMAIL_TIMEOUT = int(os.getenv('EMAIL_TIMEOUT', 60))


# =============================================================================
# CONTACT FORM SETTINGS
# =============================================================================

# Contact form email configuration
CONTACT_EMAIL_FROM = os.getenv('CONTACT_EMAIL_FROM', 'noreply@suwityarat.me')
CONTACT_EMAIL_TO = os.getenv('CONTACT_EMAIL_TO', 'jobs@suwityarat.com')
CONTACT_EMAIL_DOMAIN = os.getenv('CONTACT_EMAIL_DOMAIN', 'suwityarat.me')

# Timestamps in notification emails are shown in the site owner's timezone
CONTACT_EMAIL_TIMEZONE = os.getenv('CONTACT_EMAIL_TIMEZONE', 'America/New_York')

# Queue consumer retry policy (countdown doubles on every retry)
CONTACT_EMAIL_MAX_RETRIES = int(os.getenv('CONTACT_EMAIL_MAX_RETRIES', 3))
CONTACT_EMAIL_RETRY_DELAY = int(os.getenv('CONTACT_EMAIL_RETRY_DELAY', 60))

# How long a delivered message id is remembered to drop redeliveries
CONTACT_DELIVERED_MARKER_TTL = int(os.getenv('CONTACT_DELIVERED_MARKER_TTL', 604800))  # 7 days


# =============================================================================
# ADMIN GATE SETTINGS
# =============================================================================

# Shared admin PIN. Left empty, authentication answers "Admin PIN not configured".
ADMIN_PIN = os.getenv('ADMIN_PIN', '')
ADMIN_COOKIE_SECURE = os.getenv('ADMIN_COOKIE_SECURE', 'True') == 'True'


# =============================================================================
# ANALYTICS SETTINGS
# =============================================================================

ANALYTICS_RECENT_LIMIT = int(os.getenv('ANALYTICS_RECENT_LIMIT', 50))
ANALYTICS_SUMMARY_DAYS = int(os.getenv('ANALYTICS_SUMMARY_DAYS', 7))
ANALYTICS_TOP_PAGES = int(os.getenv('ANALYTICS_TOP_PAGES', 5))
ANALYTICS_RECENT_ACTIVITY = int(os.getenv('ANALYTICS_RECENT_ACTIVITY', 10))

# Use Redis INCR instead of read-modify-write for daily counters
ANALYTICS_ATOMIC_COUNTERS = os.getenv('ANALYTICS_ATOMIC_COUNTERS', 'False') == 'True'

SESSION_ID_COOKIE_SECURE = os.getenv('SESSION_ID_COOKIE_SECURE', 'True') == 'True'


# =============================================================================
# SITEMAP SETTINGS
# =============================================================================

SITEMAP_PAGES = [
    {'path': '', 'priority': '1.0', 'changefreq': 'weekly'},
    {'path': '/about', 'priority': '0.9', 'changefreq': 'monthly'},
    {'path': '/portfolio', 'priority': '0.9', 'changefreq': 'weekly'},
    {'path': '/contact', 'priority': '0.8', 'changefreq': 'monthly'},
    {'path': '/resume-pdf', 'priority': '0.6', 'changefreq': 'monthly'},
]

ROBOTS_DISALLOW = ['/admin/', '/resume-pdf/']
ROBOTS_ALLOW = ['/about', '/portfolio', '/contact']


# =============================================================================
# LOGGING SETTINGS
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'False') == 'True'
LOG_FILE_PATH = os.getenv('LOG_FILE_PATH', 'logs/django.log')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024 * 1024 * 10,  # 10MB
            'backupCount': 5,
            'formatter': 'verbose',
        } if LOG_TO_FILE else {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['console', 'file'] if LOG_TO_FILE else ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'] if LOG_TO_FILE else ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'celery': {
            'handlers': ['console'],
            'level': os.getenv('CELERY_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}


# =============================================================================
# SECURITY SETTINGS (Production)
# =============================================================================

if not DEBUG:
    SECURE_SSL_REDIRECT = os.getenv('SECURE_SSL_REDIRECT', 'True') == 'True'
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'
    SECURE_HSTS_SECONDS = int(os.getenv('SECURE_HSTS_SECONDS', 31536000))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = os.getenv('SECURE_HSTS_INCLUDE_SUBDOMAINS', 'True') == 'True'
    SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
