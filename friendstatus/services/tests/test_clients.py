"""Tests for the service clients."""

from unittest import TestCase, mock

import requests
from flask import Flask

from ...exceptions import Unavailable
from .. import auth, basic, push


def _response(status_code, data=None):
    response = mock.MagicMock(status_code=status_code)
    if data is None:
        response.json.side_effect = ValueError('No JSON')
    else:
        response.json.return_value = data
    return response


class TestBasicServiceSession(TestCase):
    """The basic service client."""

    def test_no_retries(self):
        """The HTTP adapter does not retry."""
        session = basic.BasicServiceSession('http://basic:34568')
        self.assertEqual(session._adapter.max_retries.total, 0)

    def test_read_entity_auth(self):
        """Path segments are quoted, and the timeout is applied."""
        http = mock.MagicMock()
        http.request.return_value = _response(200, {'Friends': ''})
        session = basic.BasicServiceSession('http://basic:34568/', timeout=3,
                                            http=http)
        response = session.read_entity_auth('DataTable', 'tok', 'USA',
                                             'Franklin,Aretha')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'Friends': ''})
        http.request.assert_called_once_with(
            'GET',
            'http://basic:34568/ReadEntityAuth/DataTable/tok/USA/'
            'Franklin%2CAretha',
            json=None,
            timeout=3
        )

    def test_update_entity_admin(self):
        """The properties are sent as the JSON body."""
        http = mock.MagicMock()
        http.request.return_value = _response(200)
        session = basic.BasicServiceSession('http://basic:34568', http=http)
        response = session.update_entity_admin('DataTable', 'USA', 'Khaled',
                                               {'Updates': 'hi\n'})
        self.assertTrue(response.ok)
        self.assertIsNone(response.data)
        args, kwargs = http.request.call_args
        self.assertEqual(args[0], 'PUT')
        self.assertEqual(kwargs['json'], {'Updates': 'hi\n'})

    def test_error_status_is_returned(self):
        """An HTTP error status is data, not an exception."""
        http = mock.MagicMock()
        http.request.return_value = _response(404)
        session = basic.BasicServiceSession('http://basic:34568', http=http)
        response = session.read_entity_admin('DataTable', 'USA', 'Nobody')
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.ok)

    def test_unreachable(self):
        """A connection failure or timeout raises :class:`.Unavailable`."""
        http = mock.MagicMock()
        http.request.side_effect = requests.exceptions.Timeout('too slow')
        session = basic.BasicServiceSession('http://basic:34568', http=http)
        with self.assertRaises(Unavailable):
            session.read_entity_admin('DataTable', 'USA', 'Nobody')

        http.request.side_effect = requests.exceptions.ConnectionError()
        with self.assertRaises(Unavailable):
            session.read_entity_admin('DataTable', 'USA', 'Nobody')


class TestAuthServiceSession(TestCase):
    """The auth service client."""

    def test_get_update_data(self):
        """The password is sent in the body."""
        http = mock.MagicMock()
        http.request.return_value = _response(200, {
            'token': 'tok', 'DataPartition': 'USA', 'DataRow': 'Khaled'
        })
        session = auth.AuthServiceSession('http://auth:34570', http=http)
        response = session.get_update_data('djkhaled', 'win')
        self.assertEqual(response.data['DataRow'], 'Khaled')
        http.request.assert_called_once_with(
            'GET', 'http://auth:34570/GetUpdateData/djkhaled',
            json={'Password': 'win'}, timeout=10.
        )


class TestPushServiceSession(TestCase):
    """The push service client."""

    def test_push_status(self):
        """The friend list is sent in the body."""
        http = mock.MagicMock()
        http.request.return_value = _response(200, {'Attempted': '1',
                                                    'Delivered': '1'})
        session = push.PushServiceSession('http://push:34574', http=http)
        session.push_status('USA', 'Khaled', 'Winning', 'USA;Franklin')
        http.request.assert_called_once_with(
            'POST', 'http://push:34574/PushStatus/USA/Khaled/Winning',
            json={'Friends': 'USA;Franklin'}, timeout=10.
        )


class TestCurrentSession(TestCase):
    """Sessions are configured from, and cached on, the app context."""

    def test_configured_from_app(self):
        """The endpoint and timeout come from the app config."""
        app = Flask('test')
        app.config['BASIC_SERVICE_URL'] = 'http://elsewhere:1234'
        app.config['REQUEST_TIMEOUT'] = '2.5'
        basic.init_app(app)
        with app.app_context():
            session = basic.current_session()
            self.assertEqual(session.endpoint, 'http://elsewhere:1234')
            self.assertEqual(session.timeout, 2.5)
            self.assertIs(basic.current_session(), session)

    def test_defaults(self):
        """Defaults point at the local development ports."""
        app = Flask('test')
        auth.init_app(app)
        push.init_app(app)
        self.assertEqual(app.config['AUTH_SERVICE_URL'],
                         'http://localhost:34570')
        self.assertEqual(app.config['PUSH_SERVICE_URL'],
                         'http://localhost:34574')
