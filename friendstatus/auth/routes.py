"""Provides routes for the auth service."""

from flask import Blueprint, Response, jsonify, make_response, request
from werkzeug.exceptions import BadRequest, NotImplemented

from . import controllers

blueprint = Blueprint('auth', __name__, url_prefix='')


def _respond(data: dict, status_code: int, headers: dict) -> Response:
    response: Response = make_response(jsonify(data), status_code, headers)
    return response


@blueprint.route('/GetReadToken/<user_id>', methods=['GET'])
def get_read_token(user_id: str) -> Response:
    """Get a read-only token for the user's data entity."""
    payload = request.get_json(silent=True)
    return _respond(*controllers.get_read_token(user_id, payload))


@blueprint.route('/GetUpdateToken/<user_id>', methods=['GET'])
def get_update_token(user_id: str) -> Response:
    """Get a read+update token for the user's data entity."""
    payload = request.get_json(silent=True)
    return _respond(*controllers.get_update_token(user_id, payload))


@blueprint.route('/GetUpdateData/<user_id>', methods=['GET'])
def get_update_data(user_id: str) -> Response:
    """Get a read+update token along with the entity it is bound to."""
    payload = request.get_json(silent=True)
    return _respond(*controllers.get_update_data(user_id, payload))


@blueprint.route('/GetReadToken', methods=['GET'])
@blueprint.route('/GetUpdateToken', methods=['GET'])
@blueprint.route('/GetUpdateData', methods=['GET'])
@blueprint.route('/', methods=['GET'])
def missing_user() -> Response:
    """A token request must name a user."""
    raise BadRequest('No user id')


@blueprint.route('/<operation>', methods=['GET'])
@blueprint.route('/<operation>/<path:rest>', methods=['GET'])
def unsupported(operation: str, rest: str = '') -> Response:
    """Other operations are not implemented."""
    raise NotImplemented(f'Unknown operation: {operation}')
