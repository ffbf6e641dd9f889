"""Provides routes for the basic table service."""

from flask import Blueprint, Response, jsonify, make_response, request
from werkzeug.exceptions import BadRequest, NotImplemented

from .. import logging
from . import controllers

logger = logging.getLogger(__name__)

blueprint = Blueprint('basic', __name__, url_prefix='')

ANY_METHOD = ['GET', 'PUT', 'POST', 'DELETE']


def _respond(data: object, status_code: int, headers: dict) -> Response:
    if data is None:
        return make_response('', status_code, headers)
    response: Response = make_response(jsonify(data), status_code, headers)
    return response


def _payload() -> object:
    return request.get_json(silent=True)


@blueprint.route('/ReadEntityAdmin/<table>', methods=['GET'])
def read_table(table: str) -> Response:
    """List a table, optionally filtered by property names in the body."""
    return _respond(*controllers.read_table(table, _payload()))


@blueprint.route('/ReadEntityAdmin/<table>/<partition>/<row>',
                 methods=['GET'])
def read_entity_admin(table: str, partition: str, row: str) -> Response:
    """Read an entity, or a whole partition if ``row`` is ``*``."""
    return _respond(*controllers.read_entity_admin(table, partition, row))


@blueprint.route('/UpdateEntityAdmin/<table>/<partition>/<row>',
                 methods=['PUT'])
def update_entity_admin(table: str, partition: str, row: str) -> Response:
    """Insert or merge an entity."""
    return _respond(*controllers.update_entity_admin(table, partition, row,
                                                     _payload()))


@blueprint.route('/DeleteEntityAdmin/<table>/<partition>/<row>',
                 methods=['DELETE'])
def delete_entity_admin(table: str, partition: str, row: str) -> Response:
    """Delete an entity."""
    return _respond(*controllers.delete_entity_admin(table, partition, row))


@blueprint.route('/CreateTableAdmin/<table>', methods=['POST'])
def create_table(table: str) -> Response:
    """Create a table."""
    return _respond(*controllers.create_table(table))


@blueprint.route('/DeleteTableAdmin/<table>', methods=['DELETE'])
def delete_table(table: str) -> Response:
    """Delete a table."""
    return _respond(*controllers.delete_table(table))


@blueprint.route('/ReadEntityAuth/<table>/<token>/<partition>/<row>',
                 methods=['GET'])
def read_entity_auth(table: str, token: str, partition: str,
                     row: str) -> Response:
    """Read an entity with a read token."""
    return _respond(*controllers.read_entity_auth(table, token, partition,
                                                  row))


@blueprint.route('/UpdateEntityAuth/<table>/<token>/<partition>/<row>',
                 methods=['PUT'])
def update_entity_auth(table: str, token: str, partition: str,
                       row: str) -> Response:
    """Merge into an entity with an update token."""
    return _respond(*controllers.update_entity_auth(table, token, partition,
                                                    row, _payload()))


@blueprint.route('/AddPropertyAdmin', methods=['PUT'])
@blueprint.route('/AddPropertyAdmin/<path:rest>', methods=['PUT'])
@blueprint.route('/UpdatePropertyAdmin', methods=['PUT'])
@blueprint.route('/UpdatePropertyAdmin/<path:rest>', methods=['PUT'])
def property_admin(rest: str = '') -> Response:
    """Reserved for bulk property operations."""
    raise NotImplemented('Property operations are not supported')


@blueprint.route('/', methods=ANY_METHOD)
@blueprint.route('/<path:path>', methods=ANY_METHOD)
def malformed(path: str = '') -> Response:
    """Anything else is a malformed request."""
    logger.debug('Malformed request: %s %s', request.method, request.path)
    raise BadRequest(f'Unknown operation or wrong number of parameters: '
                     f'{path}')
