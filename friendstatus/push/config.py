"""Flask configuration for the push service."""

import os

BASIC_SERVICE_URL = os.environ.get('BASIC_SERVICE_URL',
                                   'http://localhost:34568')
REQUEST_TIMEOUT = os.environ.get('REQUEST_TIMEOUT', '10')
"""Seconds to wait on the basic service for each read or write."""

DATA_TABLE = os.environ.get('DATA_TABLE', 'DataTable')

LOGFILE = os.environ.get('LOGFILE')
LOGLEVEL = os.environ.get('LOGLEVEL', 20)
