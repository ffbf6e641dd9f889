"""Provides routes for the push service."""

from flask import Blueprint, Response, jsonify, make_response, request
from werkzeug.exceptions import BadRequest

from . import controllers

blueprint = Blueprint('push', __name__, url_prefix='')

ANY_METHOD = ['GET', 'PUT', 'POST', 'DELETE']


@blueprint.route('/PushStatus/<partition>/<row>/<status>', methods=['POST'])
def push_status(partition: str, row: str, status: str) -> Response:
    """Push a status update to each friend in the body."""
    payload = request.get_json(silent=True)
    data, status_code, headers = controllers.push_status(partition, row,
                                                         status, payload)
    response: Response = make_response(jsonify(data), status_code, headers)
    return response


@blueprint.route('/', methods=ANY_METHOD)
@blueprint.route('/<path:path>', methods=ANY_METHOD)
def malformed(path: str = '') -> Response:
    """Anything else is a malformed request."""
    raise BadRequest(f'Unknown operation or wrong number of parameters: '
                     f'{path}')
