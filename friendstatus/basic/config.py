"""Flask configuration for the basic table service."""

import os

TOKEN_SECRET = os.environ.get('TOKEN_SECRET', 'foosecret')
"""Shared with the auth service, which signs the tokens we verify."""

SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite://')
SQLALCHEMY_TRACK_MODIFICATIONS = False
CREATE_DB = bool(int(os.environ.get('CREATE_DB', '1')))

LOGFILE = os.environ.get('LOGFILE')
LOGLEVEL = os.environ.get('LOGLEVEL', 20)
