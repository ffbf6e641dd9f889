"""Handles table and entity requests for the basic service."""

from http import HTTPStatus
from typing import Any, Optional, Tuple, Union

from flask import current_app
from werkzeug.exceptions import BadRequest, InternalServerError, NotFound

from .. import logging
from ..domain import Binding, Capability
from ..schemas import to_properties
from ..services import tables
from ..services.tables import Outcome, TableResult
from . import gateway

logger = logging.getLogger(__name__)

Response = Tuple[Optional[Union[dict, list]], int, dict]

ROW_WILDCARD = '*'


def _check(result: TableResult, what: str) -> TableResult:
    if result.outcome is Outcome.NOT_FOUND:
        raise NotFound(f'No such {what}')
    if result.outcome is Outcome.ERROR:
        raise InternalServerError(f'Could not access {what}')
    return result


def _scan_response(result: TableResult, allow_empty: bool) -> Response:
    data = [entity.to_dict(keys=True) for entity in result.entities]
    if not data and not allow_empty:
        return data, HTTPStatus.NOT_FOUND, {}
    return data, HTTPStatus.OK, {}


def read_table(table: str, payload: Any = None) -> Response:
    """
    List the entities in a table.

    Parameters
    ----------
    table : str
    payload : dict
        If non-empty, its keys are property names; only entities that have
        all of them are listed.

    Returns
    -------
    list
        Entities, each with ``Partition`` and ``Row``.
    int
        200; or 404 if a property filter matched nothing.
    dict
        Extra headers.

    """
    if payload is not None and not isinstance(payload, dict):
        raise BadRequest('Expected a JSON object of property names')
    if payload:
        result = _check(tables.scan(table, properties=list(payload)),
                        'table')
        return _scan_response(result, allow_empty=False)
    result = _check(tables.scan(table), 'table')
    return _scan_response(result, allow_empty=True)


def read_entity_admin(table: str, partition: str, row: str) -> Response:
    """Read one entity, or all of a partition if ``row`` is ``*``."""
    if row == ROW_WILDCARD:
        result = _check(tables.scan(table, partition=partition), 'table')
        return _scan_response(result, allow_empty=False)
    result = _check(tables.retrieve_entity(table, partition, row), 'entity')
    return result.entity.to_dict(), HTTPStatus.OK, {}


def update_entity_admin(table: str, partition: str, row: str,
                        payload: Any) -> Response:
    """Insert an entity, or merge properties into it."""
    try:
        properties = to_properties(payload)
    except ValueError as e:
        raise BadRequest(str(e)) from e
    _check(tables.insert_or_merge_entity(table, partition, row, properties),
           'table')
    return None, HTTPStatus.OK, {}


def delete_entity_admin(table: str, partition: str, row: str) -> Response:
    """Delete one entity."""
    _check(tables.delete_entity(table, partition, row), 'entity')
    return None, HTTPStatus.OK, {}


def create_table(table: str) -> Response:
    """Create a table; 202 if it was already there."""
    result = tables.create_table_if_not_exists(table)
    if result.outcome is Outcome.ERROR:
        raise InternalServerError(f'Could not create {table}')
    if result.outcome is Outcome.CREATED:
        return None, HTTPStatus.CREATED, {}
    return None, HTTPStatus.ACCEPTED, {}


def delete_table(table: str) -> Response:
    """Delete a table and all of its entities."""
    _check(tables.delete_table(table), 'table')
    return None, HTTPStatus.OK, {}


def read_entity_auth(table: str, raw_token: str, partition: str,
                     row: str) -> Response:
    """
    Read an entity on the strength of a token.

    Returns
    -------
    dict
        The entity's properties.
    int
        An HTTP status code.
    dict
        Extra headers.

    """
    token = gateway.authorize(raw_token, Binding(table, partition, row),
                              Capability.READ,
                              current_app.config['TOKEN_SECRET'])
    result = _check(tables.retrieve_entity(*token.binding), 'entity')
    return result.entity.to_dict(), HTTPStatus.OK, {}


def update_entity_auth(table: str, raw_token: str, partition: str, row: str,
                       payload: Any) -> Response:
    """Merge properties into an existing entity on the strength of a token."""
    token = gateway.authorize(raw_token, Binding(table, partition, row),
                              Capability.UPDATE,
                              current_app.config['TOKEN_SECRET'])
    try:
        properties = to_properties(payload)
    except ValueError as e:
        raise BadRequest(str(e)) from e
    _check(tables.merge_entity(*token.binding, properties), 'entity')
    logger.debug('Updated %s', token.binding)
    return None, HTTPStatus.OK, {}
