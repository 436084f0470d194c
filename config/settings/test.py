"""Test settings for RideRent project.

File-backed SQLite, fast password hashing, inline Celery tasks and a
throwaway media directory so uploaded vehicle images never touch the
developer's working tree.
"""

import tempfile

from .base import *  # noqa: F401,F403

DEBUG = False

# A file-backed database so tests running requests from several threads
# share one database.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': str(Path(tempfile.gettempdir()) / 'riderent.sqlite3'),  # noqa: F405
        'OPTIONS': dict(SQLITE_OPTIONS),  # noqa: F405
        'TEST': {'NAME': str(Path(tempfile.gettempdir()) / 'riderent-test.sqlite3')},  # noqa: F405
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

MEDIA_ROOT = Path(tempfile.mkdtemp(prefix='riderent-media-'))  # noqa: F405

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING['root']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['apps']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['shared']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['django']['level'] = 'CRITICAL'  # noqa: F405
