"""Client for the basic table service."""

from functools import wraps
from typing import Dict, Optional

from flask import Flask

from ..context import get_application_config, get_application_global
from .client import ServiceResponse, ServiceSession


class BasicServiceSession(ServiceSession):
    """Table reads and writes, with or without a token."""

    name = 'basic'

    def read_entity_admin(self, table: str, partition: str,
                          row: str) -> ServiceResponse:
        """Read an entity without a token."""
        return self._request('GET', 'ReadEntityAdmin', table, partition, row)

    def update_entity_admin(self, table: str, partition: str, row: str,
                            properties: Dict[str, str]) -> ServiceResponse:
        """Insert or merge an entity without a token."""
        return self._request('PUT', 'UpdateEntityAdmin', table, partition,
                             row, body=properties)

    def read_entity_auth(self, table: str, token: str, partition: str,
                         row: str) -> ServiceResponse:
        """Read an entity through the token-gated path."""
        return self._request('GET', 'ReadEntityAuth', table, token,
                             partition, row)

    def update_entity_auth(self, table: str, token: str, partition: str,
                           row: str,
                           properties: Dict[str, str]) -> ServiceResponse:
        """Merge into an entity through the token-gated path."""
        return self._request('PUT', 'UpdateEntityAuth', table, token,
                             partition, row, body=properties)


def init_app(app: Optional[Flask] = None) -> None:
    """Set required configuration defaults for the application."""
    if app is not None:
        app.config.setdefault('BASIC_SERVICE_URL', 'http://localhost:34568')
        app.config.setdefault('REQUEST_TIMEOUT', '10')


def get_session(app: Optional[Flask] = None) -> BasicServiceSession:
    """Create a new basic service session."""
    config = get_application_config(app)
    return BasicServiceSession(
        config.get('BASIC_SERVICE_URL', 'http://localhost:34568'),
        timeout=float(config.get('REQUEST_TIMEOUT', '10'))
    )


def current_session(app: Optional[Flask] = None) -> BasicServiceSession:
    """Get the basic service session for this context."""
    g = get_application_global()
    if g is not None:
        if 'basic' not in g:
            g.basic = get_session(app)
        return g.basic      # type: ignore
    return get_session(app)


@wraps(BasicServiceSession.read_entity_admin)
def read_entity_admin(table: str, partition: str,
                      row: str) -> ServiceResponse:
    """Wrapper for :meth:`BasicServiceSession.read_entity_admin`."""
    return current_session().read_entity_admin(table, partition, row)


@wraps(BasicServiceSession.update_entity_admin)
def update_entity_admin(table: str, partition: str, row: str,
                        properties: Dict[str, str]) -> ServiceResponse:
    """Wrapper for :meth:`BasicServiceSession.update_entity_admin`."""
    return current_session().update_entity_admin(table, partition, row,
                                                 properties)


@wraps(BasicServiceSession.read_entity_auth)
def read_entity_auth(table: str, token: str, partition: str,
                     row: str) -> ServiceResponse:
    """Wrapper for :meth:`BasicServiceSession.read_entity_auth`."""
    return current_session().read_entity_auth(table, token, partition, row)


@wraps(BasicServiceSession.update_entity_auth)
def update_entity_auth(table: str, token: str, partition: str, row: str,
                       properties: Dict[str, str]) -> ServiceResponse:
    """Wrapper for :meth:`BasicServiceSession.update_entity_auth`."""
    return current_session().update_entity_auth(table, token, partition,
                                                row, properties)
