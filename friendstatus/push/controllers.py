"""Fans a status update out to a list of friends."""

from http import HTTPStatus
from typing import Any, List, NamedTuple, Optional, Tuple

from flask import current_app
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from .. import logging
from ..exceptions import Unavailable
from ..friends import Friend, FriendList
from ..schemas import FriendsBody
from ..services import basic

logger = logging.getLogger(__name__)

Response = Tuple[Optional[dict], int, dict]

UPDATES = 'Updates'


class Delivery(NamedTuple):
    """The result of pushing a status to one friend."""

    friend: Friend
    delivered: bool
    reason: str = ''


def deliver(table: str, friend: Friend, status: str) -> Delivery:
    """
    Append ``status`` to one friend's ``Updates``.

    Failures are reported in the result, never raised.
    """
    try:
        response = basic.read_entity_admin(table, friend.country, friend.name)
        if not response.ok:
            return Delivery(friend, False, f'read: {response.status_code}')
        properties = {} if response.data is None else response.data
        if not isinstance(properties, dict):
            return Delivery(friend, False, 'read: unexpected body')
        updates = properties.get(UPDATES, '') + status + '\n'
        response = basic.update_entity_admin(table, friend.country,
                                             friend.name, {UPDATES: updates})
        if not response.ok:
            return Delivery(friend, False, f'update: {response.status_code}')
    except Unavailable as e:
        return Delivery(friend, False, str(e))
    return Delivery(friend, True)


def push_status(partition: str, row: str, status: str,
                payload: Any) -> Response:
    """
    Push a status update from (``partition``, ``row``) to their friends.

    Parameters
    ----------
    partition : str
    row : str
        Who the update is from.
    status : str
    payload : dict
        ``{"Friends": <serialized friend list>}``.

    Returns
    -------
    dict
        ``Attempted`` and ``Delivered`` counts.
    int
        An HTTP status code.
    dict
        Extra headers.

    """
    try:
        body = FriendsBody.model_validate(payload)
        friends = FriendList.parse(body.Friends)
    except ValidationError as e:
        raise BadRequest('Expected {"Friends": <string>}') from e
    except ValueError as e:
        raise BadRequest(f'Malformed friend list: {e}') from e

    table = current_app.config['DATA_TABLE']
    results: List[Delivery] = [deliver(table, friend, status)
                               for friend in friends]
    for result in results:
        if not result.delivered:
            logger.info('Could not push status of %s/%s to %s: %s',
                        partition, row, result.friend, result.reason)

    delivered = sum(1 for result in results if result.delivered)
    logger.debug('Pushed status of %s/%s to %i of %i friends', partition,
                 row, delivered, len(results))
    return {
        'Attempted': str(len(results)),
        'Delivered': str(delivered)
    }, HTTPStatus.OK, {}
