"""
Decide whether a token may be used on a requested entity.

A token is only ever good for the single (table, partition, row) it was
issued for, and only for the capabilities it carries.
"""

from werkzeug.exceptions import BadRequest, Forbidden, NotFound

from .. import logging, tokens
from ..domain import Binding, Capability, ScopedToken
from ..exceptions import InvalidToken
from ..services import tables

logger = logging.getLogger(__name__)


def authorize(raw_token: str, requested: Binding, capability: str,
              secret: str) -> ScopedToken:
    """
    Verify ``raw_token`` for ``capability`` on the ``requested`` entity.

    Checks run in a fixed order, and the first failure decides the response.

    Parameters
    ----------
    raw_token : str
        The token as it appeared in the request path.
    requested : :class:`.Binding`
        The coordinates named in the request path.
    capability : str
        A member of :class:`.Capability`.
    secret : str
        The token signing secret.

    Returns
    -------
    :class:`.ScopedToken`

    Raises
    ------
    :class:`werkzeug.exceptions.BadRequest`
        If the token or any coordinate is missing.
    :class:`werkzeug.exceptions.NotFound`
        If the table does not exist, or if a read token is bound to some
        other entity.
    :class:`werkzeug.exceptions.Forbidden`
        If the token is invalid or expired, if an update is attempted on some
        other entity, or if the token lacks ``capability``.

    """
    if not raw_token:
        raise BadRequest('No token')
    if not all(requested):
        raise BadRequest('Table, partition and row are all required')
    if not tables.table_exists(requested.table):
        raise NotFound(f'No such table: {requested.table}')

    try:
        token = tokens.decode(raw_token, secret)
    except InvalidToken as e:
        logger.debug('Rejected token for %s: %s', requested, e)
        raise Forbidden(str(e)) from e

    if not token.is_bound_to(requested):
        logger.debug('Token for %s used on %s', token.binding, requested)
        if capability == Capability.READ:
            raise NotFound('Token is not for this entity')
        raise Forbidden('Token is not for this entity')

    if not token.permits(capability):
        raise Forbidden(f'Token does not grant {capability}')
    return token
