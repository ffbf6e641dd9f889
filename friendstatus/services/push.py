"""Client for the push (status fan-out) service."""

from functools import wraps
from typing import Optional

from flask import Flask

from ..context import get_application_config, get_application_global
from .client import ServiceResponse, ServiceSession


class PushServiceSession(ServiceSession):
    """Hands status updates to the push service."""

    name = 'push'

    def push_status(self, partition: str, row: str, status: str,
                    friends: str) -> ServiceResponse:
        """
        Ask the push service to deliver ``status`` to each of ``friends``.

        Parameters
        ----------
        partition : str
        row : str
            The coordinates of the user whose status changed.
        status : str
        friends : str
            Serialized :class:`friendstatus.friends.FriendList`.

        """
        return self._request('POST', 'PushStatus', partition, row, status,
                             body={'Friends': friends})


def init_app(app: Optional[Flask] = None) -> None:
    """Set required configuration defaults for the application."""
    if app is not None:
        app.config.setdefault('PUSH_SERVICE_URL', 'http://localhost:34574')
        app.config.setdefault('REQUEST_TIMEOUT', '10')


def get_session(app: Optional[Flask] = None) -> PushServiceSession:
    """Create a new push service session."""
    config = get_application_config(app)
    return PushServiceSession(
        config.get('PUSH_SERVICE_URL', 'http://localhost:34574'),
        timeout=float(config.get('REQUEST_TIMEOUT', '10'))
    )


def current_session(app: Optional[Flask] = None) -> PushServiceSession:
    """Get the push service session for this context."""
    g = get_application_global()
    if g is not None:
        if 'push' not in g:
            g.push = get_session(app)
        return g.push       # type: ignore
    return get_session(app)


@wraps(PushServiceSession.push_status)
def push_status(partition: str, row: str, status: str,
                friends: str) -> ServiceResponse:
    """Wrapper for :meth:`PushServiceSession.push_status`."""
    return current_session().push_status(partition, row, status, friends)
