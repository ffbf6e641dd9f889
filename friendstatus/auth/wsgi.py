"""Web Server Gateway Interface entry-point for the auth service."""

import os

from .factory import create_app

__flask_app__ = create_app()


def application(environ, start_response):    # type: ignore
    """WSGI application."""
    for key, value in environ.items():
        # The hostname passed in by the server is not what we want for
        # building URLs; keep ``SERVER_NAME`` as configured.
        if key == 'SERVER_NAME':
            continue
        if isinstance(value, str):
            os.environ[key] = value
            __flask_app__.config[key] = value
    return __flask_app__(environ, start_response)
