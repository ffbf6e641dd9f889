"""Handles sign-on, friend list and status requests."""

from http import HTTPStatus
from typing import Any, Dict, Optional, Tuple

from flask import current_app
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, Forbidden, \
    InternalServerError, NotFound, ServiceUnavailable, default_exceptions

from .. import logging, tokens
from ..domain import SessionEntry
from ..exceptions import SessionStoreError, Unavailable
from ..friends import Friend, FriendList, validate
from ..schemas import PasswordBody
from ..services import auth, basic, push, sessions
from ..services.client import ServiceResponse

logger = logging.getLogger(__name__)

Response = Tuple[Optional[dict], int, dict]

FRIENDS = 'Friends'
STATUS = 'Status'


def _raise_for(response: ServiceResponse, what: str) -> None:
    """Pass a downstream error status back to our caller."""
    if response.ok:
        return
    logger.info('%s failed with %i', what, response.status_code)
    exc = default_exceptions.get(response.status_code, InternalServerError)
    raise exc(f'{what} failed')


def _session_for(user_id: str) -> SessionEntry:
    try:
        entry = sessions.get(user_id)
    except SessionStoreError as e:
        raise ServiceUnavailable('Session store unavailable') from e
    if entry is None:
        raise Forbidden(f'{user_id} is not signed on')
    return entry


def _read_own_entity(entry: SessionEntry) -> Dict[str, str]:
    try:
        response = basic.read_entity_auth(current_app.config['DATA_TABLE'],
                                          entry.token, entry.partition,
                                          entry.row)
    except Unavailable as e:
        raise ServiceUnavailable('Basic service unavailable') from e
    _raise_for(response, 'Read')
    data: Dict[str, str] = response.data or {}
    return data


def _update_own_entity(entry: SessionEntry,
                       properties: Dict[str, str]) -> None:
    try:
        response = basic.update_entity_auth(current_app.config['DATA_TABLE'],
                                            entry.token, entry.partition,
                                            entry.row, properties)
    except Unavailable as e:
        raise ServiceUnavailable('Basic service unavailable') from e
    _raise_for(response, 'Update')


def _friend_list(entity: Dict[str, str]) -> FriendList:
    try:
        return FriendList.parse(entity.get(FRIENDS, ''))
    except ValueError as e:
        logger.error('Stored friend list is corrupt: %s', e)
        raise InternalServerError('Stored friend list is corrupt') from e


def _friend(country: str, name: str) -> Friend:
    friend = Friend(country, name)
    try:
        validate(friend)
    except ValueError as e:
        raise BadRequest(str(e)) from e
    return friend


def sign_on(user_id: str, payload: Any) -> Response:
    """
    Sign a user on with their password.

    Signing on when already signed on succeeds and leaves the existing
    session alone.

    Parameters
    ----------
    user_id : str
    payload : dict
        Must be exactly ``{"Password": <str>}``.

    Returns
    -------
    dict
    int
        An HTTP status code.
    dict
        Extra headers.

    """
    try:
        body = PasswordBody.model_validate(payload)
    except ValidationError as e:
        raise BadRequest('Expected {"Password": <string>}') from e

    try:
        response = auth.get_update_data(user_id, body.Password)
        if not response.ok:
            raise NotFound('Could not get a token')
        token = response.data['token']
        partition = response.data['DataPartition']
        row = response.data['DataRow']
        # The credential record may point at an entity that is gone.
        check = basic.read_entity_admin(current_app.config['DATA_TABLE'],
                                        partition, row)
    except Unavailable as e:
        raise ServiceUnavailable('Could not sign on') from e
    except (TypeError, KeyError) as e:
        raise NotFound('Unexpected response from auth service') from e
    if not check.ok:
        logger.info('Data entity for %s does not exist', user_id)
        raise NotFound('No data entity')

    entry = SessionEntry(token=token, partition=partition, row=row,
                         expires=tokens.peek_expiry(token))
    try:
        if not sessions.put(user_id, entry):
            logger.debug('%s is already signed on', user_id)
    except SessionStoreError as e:
        raise ServiceUnavailable('Session store unavailable') from e
    return {}, HTTPStatus.OK, {}


def sign_off(user_id: str) -> Response:
    """Sign a user off."""
    try:
        removed = sessions.delete(user_id)
    except SessionStoreError as e:
        raise ServiceUnavailable('Session store unavailable') from e
    if not removed:
        raise NotFound(f'{user_id} is not signed on')
    return {}, HTTPStatus.OK, {}


def read_friend_list(user_id: str) -> Response:
    """Get a signed-on user's serialized friend list."""
    entry = _session_for(user_id)
    entity = _read_own_entity(entry)
    return {FRIENDS: entity.get(FRIENDS, '')}, HTTPStatus.OK, {}


def add_friend(user_id: str, country: str, name: str) -> Response:
    """Add a friend to a signed-on user's list, if not already there."""
    entry = _session_for(user_id)
    friend = _friend(country, name)
    friends = _friend_list(_read_own_entity(entry))
    if friends.add(friend):
        _update_own_entity(entry, {FRIENDS: friends.serialize()})
    return {}, HTTPStatus.OK, {}


def un_friend(user_id: str, country: str, name: str) -> Response:
    """Remove a friend from a signed-on user's list, if there."""
    entry = _session_for(user_id)
    friend = _friend(country, name)
    friends = _friend_list(_read_own_entity(entry))
    if friends.remove(friend):
        _update_own_entity(entry, {FRIENDS: friends.serialize()})
    return {}, HTTPStatus.OK, {}


def update_status(user_id: str, status: str) -> Response:
    """
    Set a signed-on user's status and push it to their friends.

    Delivery to individual friends is best-effort; the push service reports
    how many it reached.
    """
    entry = _session_for(user_id)
    entity = _read_own_entity(entry)
    _update_own_entity(entry, {STATUS: status})
    try:
        response = push.push_status(entry.partition, entry.row, status,
                                    entity.get(FRIENDS, ''))
    except Unavailable as e:
        raise ServiceUnavailable('Push service unavailable') from e
    _raise_for(response, 'Push')
    logger.info('Status of %s pushed: %s', user_id, response.data)
    return response.data or {}, HTTPStatus.OK, {}
