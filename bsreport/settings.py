"""
Django settings for the bsreport project.

Values that vary between deployments are read from environment variables.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-bsreport-development-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'False').lower() in ('true', '1', 'yes')

ALLOWED_HOSTS = [h.strip() for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h.strip()]


# Application definition

INSTALLED_APPS = [
    'core',
    'reports',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'core.middleware_api.ReportAPILoggingMiddleware',
]

ROOT_URLCONF = 'bsreport.urls'

WSGI_APPLICATION = 'bsreport.wsgi.application'
ASGI_APPLICATION = 'bsreport.asgi.application'

# The service keeps no persistent state
DATABASES = {}

# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = os.environ.get('DJANGO_TIME_ZONE', 'UTC')

USE_I18N = False

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Report export

# Unset means one render per CPU
REPORT_EXPORT_MAX_CONCURRENCY = os.environ.get('REPORT_EXPORT_MAX_CONCURRENCY') or None

REPORT_EXPORT_DEFAULT_BATCH_SIZE = os.environ.get('REPORT_EXPORT_DEFAULT_BATCH_SIZE') or 10

# Directory receiving a copy of every batch-exported PDF; unset disables archiving
REPORT_EXPORT_ARCHIVE_DIR = os.environ.get('REPORT_EXPORT_ARCHIVE_DIR') or None


# Logging

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.environ.get('DJANGO_LOG_LEVEL', 'WARNING').upper(),
            'propagate': False,
        },
    },
}
