"""Production settings for RideRent project.

This module extends the base settings with production specific
configuration. Ensure that sensitive values are provided via
environment variables and that security settings are appropriate for
production use.
"""

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',')  # noqa: F405

# Configure secure proxies and cookies
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# Row locks for booking creation need a database that honours SELECT ... FOR UPDATE
DATABASES['default']['ENGINE'] = os.environ.get(  # noqa: F405
    'DB_ENGINE', 'django.db.backends.postgresql'
)
DATABASES['default']['CONN_MAX_AGE'] = int(os.environ.get('DB_CONN_MAX_AGE', 60))  # noqa: F405
if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':  # noqa: F405
    DATABASES['default']['OPTIONS'] = dict(SQLITE_OPTIONS)  # noqa: F405
else:
    DATABASES['default'].pop('OPTIONS', None)  # noqa: F405
