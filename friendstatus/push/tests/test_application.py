"""Tests for :mod:`friendstatus.push` through its HTTP interface."""

from http import HTTPStatus
from unittest import TestCase, mock

from ...exceptions import Unavailable
from ...friends import Friend
from ...services.client import ServiceResponse
from .. import controllers
from ..factory import create_app


@mock.patch(f'{controllers.__name__}.basic')
class TestPushStatus(TestCase):
    """Status updates are appended to each friend's ``Updates``."""

    def setUp(self):
        self.app = create_app()
        self.client = self.app.test_client()

    def test_push(self, mock_basic):
        """Each friend gets the status as a new line."""
        mock_basic.read_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK, {'Updates': 'Old\n'})
        mock_basic.update_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK)

        response = self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                                    json={'Friends': 'Canada;Drake'})
        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.get_json(),
                         {'Attempted': '1', 'Delivered': '1'})
        mock_basic.read_entity_admin.assert_called_once_with(
            'DataTable', 'Canada', 'Drake'
        )
        mock_basic.update_entity_admin.assert_called_once_with(
            'DataTable', 'Canada', 'Drake', {'Updates': 'Old\nWinning\n'}
        )

    def test_first_update(self, mock_basic):
        """A friend with no updates yet gets just this one."""
        mock_basic.read_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK, {})
        mock_basic.update_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK)

        self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                         json={'Friends': 'Canada;Drake'})
        args, _ = mock_basic.update_entity_admin.call_args
        self.assertEqual(args[-1], {'Updates': 'Winning\n'})

    def test_missing_friend(self, mock_basic):
        """A friend who does not exist is skipped."""
        mock_basic.read_entity_admin.side_effect = [
            ServiceResponse(HTTPStatus.OK, {'Updates': ''}),
            ServiceResponse(HTTPStatus.NOT_FOUND),
        ]
        mock_basic.update_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK)

        response = self.client.post(
            '/PushStatus/USA/Khaled,DJ/Winning',
            json={'Friends': 'Canada;Drake|Nowhere;Nobody'}
        )
        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.get_json(),
                         {'Attempted': '2', 'Delivered': '1'})
        self.assertEqual(mock_basic.update_entity_admin.call_count, 1)

    def test_failures_do_not_stop_delivery(self, mock_basic):
        """Errors for one friend do not keep the others from their update."""
        mock_basic.read_entity_admin.side_effect = [
            Unavailable('nope'),
            ServiceResponse(HTTPStatus.OK, {}),
            ServiceResponse(HTTPStatus.OK, {}),
        ]
        mock_basic.update_entity_admin.side_effect = [
            ServiceResponse(HTTPStatus.INTERNAL_SERVER_ERROR),
            ServiceResponse(HTTPStatus.OK),
        ]

        response = self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                                    json={'Friends': 'a;b|c;d|e;f'})
        self.assertEqual(response.get_json(),
                         {'Attempted': '3', 'Delivered': '1'})

    def test_unexpected_read_body(self, mock_basic):
        """A read that does not give back one entity is a failed delivery."""
        mock_basic.read_entity_admin.side_effect = [
            ServiceResponse(HTTPStatus.OK, [{'PartitionKey': 'USA'}]),
            ServiceResponse(HTTPStatus.OK, {}),
        ]
        mock_basic.update_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK)

        response = self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                                    json={'Friends': 'Canada;Drake|USA;x'})
        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.get_json(),
                         {'Attempted': '2', 'Delivered': '1'})
        mock_basic.update_entity_admin.assert_called_once_with(
            'DataTable', 'USA', 'x', {'Updates': 'Winning\n'}
        )

    def test_deliver_unexpected_body(self, mock_basic):
        """A list in place of an entity is reported, not raised."""
        mock_basic.read_entity_admin.return_value = \
            ServiceResponse(HTTPStatus.OK, [])
        friend = Friend('USA', 'x')
        self.assertEqual(controllers.deliver('DataTable', friend, 'Winning'),
                         controllers.Delivery(friend, False,
                                              'read: unexpected body'))
        mock_basic.update_entity_admin.assert_not_called()

    def test_no_friends(self, mock_basic):
        """Nobody to push to is not an error."""
        response = self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                                    json={'Friends': ''})
        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.get_json(),
                         {'Attempted': '0', 'Delivered': '0'})
        mock_basic.read_entity_admin.assert_not_called()

    def test_malformed_friend_list(self, mock_basic):
        """A list that cannot be parsed is a 400."""
        response = self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                                    json={'Friends': 'Canada'})
        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)

    def test_bad_body(self, mock_basic):
        """The body must be ``{"Friends": <string>}``."""
        response = self.client.post('/PushStatus/USA/Khaled,DJ/Winning',
                                    json={'friends': 'Canada;Drake'})
        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)

    def test_missing_segments(self, mock_basic):
        """The partition, row and status are all required."""
        response = self.client.post('/PushStatus/USA/Khaled,DJ',
                                    json={'Friends': 'Canada;Drake'})
        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)
