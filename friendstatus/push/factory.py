"""Application factory for the push service."""

from flask import Flask

from ..handlers import register_error_handlers
from ..services import basic
from . import routes


def create_app() -> Flask:
    """Initialize and configure the push service."""
    app = Flask('friendstatus.push')
    app.config.from_pyfile('config.py')

    basic.init_app(app)
    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    return app
