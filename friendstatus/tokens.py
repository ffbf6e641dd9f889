"""Encode and verify capability tokens bound to a single entity."""

from datetime import datetime, timedelta
from typing import Iterable, Optional

import jwt
from pytz import UTC

from . import domain, logging
from .exceptions import ExpiredToken, InvalidToken

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'
DEFAULT_LIFETIME = 86400
REQUIRED_CLAIMS = ['tbl', 'pk', 'rk', 'cap', 'exp']


def issue(binding: domain.Binding, capabilities: Iterable[str], secret: str,
          lifetime: int = DEFAULT_LIFETIME,
          now: Optional[datetime] = None) -> str:
    """
    Mint a new token for ``binding``.

    Parameters
    ----------
    binding : :class:`.domain.Binding`
        The table, partition and row that the token is good for.
    capabilities : iterable
        Members of :class:`.domain.Capability`.
    secret : str
        Signing secret shared with the verifier.
    lifetime : int
        Seconds until the token expires.
    now : :class:`datetime`
        Issue time; defaults to the current time (UTC).

    Returns
    -------
    str

    """
    if now is None:
        now = datetime.now(tz=UTC)
    token = domain.ScopedToken(
        binding=binding,
        capabilities=list(capabilities),
        expires=now + timedelta(seconds=lifetime),
        issued=now
    )
    return encode(token, secret)


def encode(token: domain.ScopedToken, secret: str) -> str:
    """Sign a :class:`.domain.ScopedToken` as a JWT."""
    claims = {
        'tbl': token.binding.table,
        'pk': token.binding.partition,
        'rk': token.binding.row,
        'cap': list(token.capabilities),
        'exp': token.expires,
    }
    if token.issued is not None:
        claims['iat'] = token.issued
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode(raw: str, secret: str) -> domain.ScopedToken:
    """
    Verify and unpack a token.

    Raises
    ------
    :class:`.ExpiredToken`
        If the signature is good but the token has expired.
    :class:`.InvalidToken`
        If the token is forged, malformed, or missing claims.

    """
    try:
        data = jwt.decode(raw, secret, algorithms=[ALGORITHM],
                          options={'require': REQUIRED_CLAIMS})
    except jwt.exceptions.ExpiredSignatureError as e:
        raise ExpiredToken('Token has expired') from e
    except jwt.exceptions.InvalidTokenError as e:
        raise InvalidToken(f'Not a valid token: {e}') from e

    capabilities = data['cap']
    if not isinstance(capabilities, list) \
            or not all(c in domain.Capability.ALL for c in capabilities):
        raise InvalidToken('Token carries unknown capabilities')
    for claim in ('tbl', 'pk', 'rk'):
        if not isinstance(data[claim], str):
            raise InvalidToken(f'Claim {claim} must be a string')

    issued = data.get('iat')
    return domain.ScopedToken(
        binding=domain.Binding(data['tbl'], data['pk'], data['rk']),
        capabilities=capabilities,
        expires=datetime.fromtimestamp(data['exp'], tz=UTC),
        issued=datetime.fromtimestamp(issued, tz=UTC) if issued else None
    )


def peek_expiry(raw: str) -> Optional[datetime]:
    """
    Read the expiry of a token without verifying it.

    Only for bookkeeping on tokens we were handed by the token service; never
    use this to make an access decision.
    """
    try:
        data = jwt.decode(raw, options={'verify_signature': False})
    except jwt.exceptions.InvalidTokenError as e:
        logger.debug('Could not read expiry from token: %s', e)
        return None
    exp = data.get('exp')
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=UTC)
