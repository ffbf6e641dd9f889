"""Application factory for the basic table service."""

from flask import Flask

from ..handlers import register_error_handlers
from ..services import tables
from . import routes


def create_app() -> Flask:
    """Initialize and configure the basic table service."""
    app = Flask('friendstatus.basic')
    app.config.from_pyfile('config.py')

    tables.init_app(app)
    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)

    if app.config['CREATE_DB']:
        with app.app_context():
            tables.create_all()
    return app
