"""Provides routes for the user service."""

from flask import Blueprint, Response, jsonify, make_response, request
from werkzeug.exceptions import BadRequest

from .. import logging
from . import controllers

logger = logging.getLogger(__name__)

blueprint = Blueprint('user', __name__, url_prefix='')

ANY_METHOD = ['GET', 'PUT', 'POST', 'DELETE']


def _respond(data: dict, status_code: int, headers: dict) -> Response:
    response: Response = make_response(jsonify(data), status_code, headers)
    return response


@blueprint.route('/SignOn/<user_id>', methods=['POST'])
def sign_on(user_id: str) -> Response:
    """Sign on with a password."""
    payload = request.get_json(silent=True)
    return _respond(*controllers.sign_on(user_id, payload))


@blueprint.route('/SignOff/<user_id>', methods=['POST'])
def sign_off(user_id: str) -> Response:
    """Sign off."""
    return _respond(*controllers.sign_off(user_id))


@blueprint.route('/ReadFriendList/<user_id>', methods=['GET'])
def read_friend_list(user_id: str) -> Response:
    """Get the user's friend list."""
    return _respond(*controllers.read_friend_list(user_id))


@blueprint.route('/AddFriend/<user_id>/<country>/<name>', methods=['PUT'])
def add_friend(user_id: str, country: str, name: str) -> Response:
    """Add a friend."""
    return _respond(*controllers.add_friend(user_id, country, name))


@blueprint.route('/UnFriend/<user_id>/<country>/<name>', methods=['PUT'])
def un_friend(user_id: str, country: str, name: str) -> Response:
    """Remove a friend."""
    return _respond(*controllers.un_friend(user_id, country, name))


@blueprint.route('/UpdateStatus/<user_id>/<status>', methods=['PUT'])
def update_status(user_id: str, status: str) -> Response:
    """Set the user's status and push it to their friends."""
    return _respond(*controllers.update_status(user_id, status))


@blueprint.route('/', methods=ANY_METHOD)
@blueprint.route('/<path:path>', methods=ANY_METHOD)
def malformed(path: str = '') -> Response:
    """Anything else is a malformed request."""
    logger.debug('Malformed request: %s %s', request.method, request.path)
    raise BadRequest(f'Unknown operation or wrong number of parameters: '
                     f'{path}')
