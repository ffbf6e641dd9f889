"""Flask configuration for the auth service."""

import os

TOKEN_SECRET = os.environ.get('TOKEN_SECRET', 'foosecret')
"""Shared with the basic service, which verifies the tokens we sign."""

TOKEN_LIFETIME = int(os.environ.get('TOKEN_LIFETIME', '86400'))
"""Seconds for which an issued token is good."""

AUTH_TABLE = os.environ.get('AUTH_TABLE', 'AuthTable')
AUTH_PARTITION = os.environ.get('AUTH_PARTITION', 'Userid')
DATA_TABLE = os.environ.get('DATA_TABLE', 'DataTable')

SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite://')
SQLALCHEMY_TRACK_MODIFICATIONS = False
CREATE_DB = bool(int(os.environ.get('CREATE_DB', '1')))

LOGFILE = os.environ.get('LOGFILE')
LOGLEVEL = os.environ.get('LOGLEVEL', 20)
