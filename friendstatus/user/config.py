"""Flask configuration for the user service."""

import os

BASIC_SERVICE_URL = os.environ.get('BASIC_SERVICE_URL',
                                   'http://localhost:34568')
AUTH_SERVICE_URL = os.environ.get('AUTH_SERVICE_URL',
                                  'http://localhost:34570')
PUSH_SERVICE_URL = os.environ.get('PUSH_SERVICE_URL',
                                  'http://localhost:34574')
REQUEST_TIMEOUT = os.environ.get('REQUEST_TIMEOUT', '10')
"""Seconds to wait on any other service before giving up."""

DATA_TABLE = os.environ.get('DATA_TABLE', 'DataTable')

SESSION_STORE = os.environ.get('SESSION_STORE', 'memory')
"""Either ``memory`` (this process only) or ``redis``."""

REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')
REDIS_DATABASE = os.environ.get('REDIS_DATABASE', '0')
TOKEN_LIFETIME = os.environ.get('TOKEN_LIFETIME', '86400')

LOGFILE = os.environ.get('LOGFILE')
LOGLEVEL = os.environ.get('LOGLEVEL', 20)
