"""Production settings for the room booking service.

This module extends the base settings with production specific
configuration. Secret material and hosts must be provided via
environment variables; startup fails when they are missing.
"""

from .base import *  # noqa: F401,F403
from shared.infrastructure.env import get_env, get_env_int, get_env_list

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = get_env('DJANGO_SECRET_KEY', required=True)
SIMPLE_JWT['SIGNING_KEY'] = get_env('JWT_SIGNING_KEY', required=True)  # noqa: F405

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = get_env_list('DJANGO_ALLOWED_HOSTS', '')

# Configure secure proxies and cookies
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True

# Bounded connection pool (psycopg 3). Each request borrows a connection
# and returns it when the request finishes, on success and on error.
if DATABASES['default']['ENGINE'] == 'django.db.backends.postgresql':  # noqa: F405
    DATABASES['default']['OPTIONS'] = {  # noqa: F405
        'pool': {
            'min_size': get_env_int('DB_POOL_MIN_SIZE', 2),
            'max_size': get_env_int('DB_POOL_MAX_SIZE', 10),
            'timeout': get_env_int('DB_POOL_TIMEOUT', 10),
        },
    }
