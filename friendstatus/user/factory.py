"""Application factory for the user service."""

from typing import Optional

from flask import Flask

from ..handlers import register_error_handlers
from ..services import auth, basic, push, sessions
from . import routes


def create_app(session_store: Optional[sessions.SessionStore] = None) \
        -> Flask:
    """
    Initialize and configure the user service.

    Parameters
    ----------
    session_store : :class:`.sessions.SessionStore`
        Where to keep sessions. If not given, one is built according to
        ``SESSION_STORE``.

    """
    app = Flask('friendstatus.user')
    app.config.from_pyfile('config.py')

    basic.init_app(app)
    auth.init_app(app)
    push.init_app(app)
    sessions.init_app(app, session_store)

    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    return app
