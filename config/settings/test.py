"""Settings used by the test suite."""

from .base import *  # noqa: F401,F403
from shared.infrastructure.env import get_env

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': get_env('TEST_DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': get_env('TEST_DB_NAME', ':memory:'),
        'USER': get_env('TEST_DB_USER', ''),
        'PASSWORD': get_env('TEST_DB_PASSWORD', ''),
        'HOST': get_env('TEST_DB_HOST', ''),
        'PORT': get_env('TEST_DB_PORT', ''),
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

SIMPLE_JWT['SIGNING_KEY'] = 'test-signing-key-with-enough-length-for-hs256'  # noqa: F405

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

TIME_ZONE = 'UTC'
