"""Client for the auth (token) service."""

from functools import wraps
from typing import Optional

from flask import Flask

from ..context import get_application_config, get_application_global
from .client import ServiceResponse, ServiceSession


class AuthServiceSession(ServiceSession):
    """Exchanges a user's password for tokens."""

    name = 'auth'

    def get_read_token(self, user_id: str,
                       password: str) -> ServiceResponse:
        """Get a read-only token for the user's data entity."""
        return self._request('GET', 'GetReadToken', user_id,
                             body={'Password': password})

    def get_update_token(self, user_id: str,
                         password: str) -> ServiceResponse:
        """Get a read+update token for the user's data entity."""
        return self._request('GET', 'GetUpdateToken', user_id,
                             body={'Password': password})

    def get_update_data(self, user_id: str,
                        password: str) -> ServiceResponse:
        """
        Get a read+update token along with the entity it is bound to.

        Returns
        -------
        :class:`.ServiceResponse`
            On success, ``data`` has ``token``, ``DataPartition`` and
            ``DataRow``.

        """
        return self._request('GET', 'GetUpdateData', user_id,
                             body={'Password': password})


def init_app(app: Optional[Flask] = None) -> None:
    """Set required configuration defaults for the application."""
    if app is not None:
        app.config.setdefault('AUTH_SERVICE_URL', 'http://localhost:34570')
        app.config.setdefault('REQUEST_TIMEOUT', '10')


def get_session(app: Optional[Flask] = None) -> AuthServiceSession:
    """Create a new auth service session."""
    config = get_application_config(app)
    return AuthServiceSession(
        config.get('AUTH_SERVICE_URL', 'http://localhost:34570'),
        timeout=float(config.get('REQUEST_TIMEOUT', '10'))
    )


def current_session(app: Optional[Flask] = None) -> AuthServiceSession:
    """Get the auth service session for this context."""
    g = get_application_global()
    if g is not None:
        if 'auth' not in g:
            g.auth = get_session(app)
        return g.auth       # type: ignore
    return get_session(app)


@wraps(AuthServiceSession.get_read_token)
def get_read_token(user_id: str, password: str) -> ServiceResponse:
    """Wrapper for :meth:`AuthServiceSession.get_read_token`."""
    return current_session().get_read_token(user_id, password)


@wraps(AuthServiceSession.get_update_token)
def get_update_token(user_id: str, password: str) -> ServiceResponse:
    """Wrapper for :meth:`AuthServiceSession.get_update_token`."""
    return current_session().get_update_token(user_id, password)


@wraps(AuthServiceSession.get_update_data)
def get_update_data(user_id: str, password: str) -> ServiceResponse:
    """Wrapper for :meth:`AuthServiceSession.get_update_data`."""
    return current_session().get_update_data(user_id, password)
