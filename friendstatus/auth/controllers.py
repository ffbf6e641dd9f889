"""Issues tokens in exchange for passwords."""

import hmac
from http import HTTPStatus
from typing import Any, Iterable, Optional, Tuple

from flask import current_app
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, InternalServerError, NotFound

from .. import logging, tokens
from ..domain import Binding, Credential, READ_ONLY, READ_UPDATE
from ..schemas import PasswordBody
from ..services import tables
from ..services.tables import Outcome

logger = logging.getLogger(__name__)

Response = Tuple[Optional[dict], int, dict]

PASSWORD = 'Password'
DATA_PARTITION = 'DataPartition'
DATA_ROW = 'DataRow'


def _load_credential(user_id: str) -> Credential:
    config = current_app.config
    result = tables.retrieve_entity(config['AUTH_TABLE'],
                                    config['AUTH_PARTITION'], user_id)
    if result.outcome is Outcome.ERROR:
        raise InternalServerError('Could not load credentials')
    if result.outcome is Outcome.NOT_FOUND:
        logger.debug('No credentials for %s', user_id)
        raise NotFound('No such user')
    properties = result.entity.properties
    return Credential(user_id=user_id,
                      password=properties.get(PASSWORD, ''),
                      partition=properties.get(DATA_PARTITION, ''),
                      row=properties.get(DATA_ROW, ''))


def _password_matches(credential: Credential, password: str) -> bool:
    return hmac.compare_digest(credential.password.encode('utf-8'),
                               password.encode('utf-8'))


def issue_token(user_id: str, payload: Any, capabilities: Iterable[str],
                include_binding: bool = False) -> Response:
    """
    Exchange a user's password for a token bound to their data entity.

    Bad passwords and unknown users get the same 404, so that a caller cannot
    tell which it was.

    Parameters
    ----------
    user_id : str
    payload : dict
        Must be exactly ``{"Password": <str>}``.
    capabilities : iterable
        What the token should grant.
    include_binding : bool
        If True, the response also names the partition and row.

    Returns
    -------
    dict
        Has ``token``; and ``DataPartition`` and ``DataRow`` if requested.
    int
        An HTTP status code.
    dict
        Extra headers.

    """
    try:
        body = PasswordBody.model_validate(payload)
    except ValidationError as e:
        raise BadRequest('Expected {"Password": <string>}') from e

    config = current_app.config
    for table in (config['AUTH_TABLE'], config['DATA_TABLE']):
        if not tables.table_exists(table):
            logger.error('Table %s does not exist', table)
            raise NotFound(f'No such table: {table}')

    credential = _load_credential(user_id)
    if not _password_matches(credential, body.Password):
        logger.debug('Wrong password for %s', user_id)
        raise NotFound('No such user')
    if not credential.has_binding:
        logger.error('Credentials for %s name no data entity', user_id)
        raise NotFound('No data entity for user')

    binding = Binding(config['DATA_TABLE'], credential.partition,
                      credential.row)
    token = tokens.issue(binding, capabilities, config['TOKEN_SECRET'],
                         lifetime=int(config['TOKEN_LIFETIME']))
    logger.info('Issued %s token for %s', '+'.join(capabilities), user_id)

    data = {'token': token}
    if include_binding:
        data.update({DATA_PARTITION: credential.partition,
                     DATA_ROW: credential.row})
    return data, HTTPStatus.OK, {}


def get_read_token(user_id: str, payload: Any) -> Response:
    """Issue a read-only token."""
    return issue_token(user_id, payload, READ_ONLY)


def get_update_token(user_id: str, payload: Any) -> Response:
    """Issue a read+update token."""
    return issue_token(user_id, payload, READ_UPDATE)


def get_update_data(user_id: str, payload: Any) -> Response:
    """Issue a read+update token, and say which entity it is for."""
    return issue_token(user_id, payload, READ_UPDATE, include_binding=True)
