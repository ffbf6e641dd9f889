"""Shared plumbing for the HTTP clients of the other services."""

from typing import Any, NamedTuple, Optional
from urllib.parse import quote

import requests

from .. import logging
from ..exceptions import Unavailable

logger = logging.getLogger(__name__)


class ServiceResponse(NamedTuple):
    """What a downstream service said."""

    status_code: int
    data: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class ServiceSession(object):
    """
    An HTTP session with a single downstream service.

    Calls are bounded by ``timeout`` and are never retried.
    """

    name = 'service'

    def __init__(self, endpoint: str, timeout: float = 10.,
                 http: Optional[requests.Session] = None) -> None:
        """Create a new HTTP session."""
        self.endpoint = endpoint.rstrip('/')
        self.timeout = timeout
        if http is None:
            http = requests.Session()
            self._adapter = requests.adapters.HTTPAdapter(max_retries=0)
            http.mount('http://', self._adapter)
            http.mount('https://', self._adapter)
        self._session = http
        logger.debug('New %s session at %s', self.name, self.endpoint)

    def _path(self, *segments: str) -> str:
        return '/'.join(quote(segment, safe='') for segment in segments)

    def _request(self, method: str, *segments: str,
                 body: Optional[Any] = None) -> ServiceResponse:
        """
        Make a request and collect the status and any JSON in the response.

        Raises
        ------
        :class:`.Unavailable`
            If the service could not be reached in time.

        """
        url = f'{self.endpoint}/{self._path(*segments)}'
        logger.debug('%s %s', method, url)
        try:
            response = self._session.request(method, url, json=body,
                                             timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error('%s unavailable: %s', self.name, e)
            raise Unavailable(f'Could not reach {self.name}: {e}') from e

        try:
            data = response.json()
        except ValueError:
            data = None
        logger.debug('%s responded with %i', self.name, response.status_code)
        return ServiceResponse(response.status_code, data)
