"""Exceptions raised outside of the request/response layer."""


class InvalidToken(ValueError):
    """The token is malformed, forged, or otherwise unusable."""


class ExpiredToken(InvalidToken):
    """The token was valid, but its lifetime has elapsed."""


class Unavailable(IOError):
    """A downstream service could not be reached."""


class SessionStoreError(RuntimeError):
    """The session store could not complete an operation."""
