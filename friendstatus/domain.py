"""Core data structures shared by the friendstatus services."""

from typing import Any, Dict, List, NamedTuple, Optional
from datetime import datetime

import dateutil.parser
from pytz import UTC


class Capability:
    """Operations that a scoped token may grant."""

    READ = 'read'
    UPDATE = 'update'

    ALL = (READ, UPDATE)


READ_ONLY = [Capability.READ]
READ_UPDATE = [Capability.READ, Capability.UPDATE]


class Binding(NamedTuple):
    """The coordinates of the single entity that a token is good for."""

    table: str
    partition: str
    row: str

    def __str__(self) -> str:
        return '/'.join(self)


class ScopedToken(NamedTuple):
    """The verified contents of a capability token."""

    binding: Binding
    """The only entity on which this token may be used."""

    capabilities: List[str]
    """Items are members of :class:`.Capability`."""

    expires: datetime

    issued: Optional[datetime] = None

    @property
    def expired(self) -> bool:
        """Whether the token is past its expiry."""
        return self.expires <= datetime.now(tz=UTC)

    def permits(self, capability: str) -> bool:
        """Whether the token carries ``capability``."""
        return capability in self.capabilities

    def is_bound_to(self, binding: Binding) -> bool:
        """Whether ``binding`` is exactly the entity this token is for."""
        return self.binding == binding


class Credential(NamedTuple):
    """A user's stored password and the data entity that belongs to them."""

    user_id: str
    password: str
    partition: str = ''
    row: str = ''

    @property
    def has_binding(self) -> bool:
        """A credential without data coordinates cannot be issued a token."""
        return bool(self.partition) and bool(self.row)


class Entity(NamedTuple):
    """A flat map of string properties keyed by partition and row."""

    partition: str
    row: str
    properties: Dict[str, str] = {}

    def to_dict(self, keys: bool = False) -> Dict[str, str]:
        """
        Render the entity's properties for a response body.

        Parameters
        ----------
        keys : bool
            If True, include ``Partition`` and ``Row``, as in a table scan.

        """
        data: Dict[str, str] = {}
        if keys:
            data.update({'Partition': self.partition, 'Row': self.row})
        data.update(self.properties)
        return data


class SessionEntry(NamedTuple):
    """A signed-on user's token and the coordinates it is bound to."""

    token: str
    partition: str
    row: str

    expires: Optional[datetime] = None
    """Taken from the token itself; the entry is dead once this passes."""

    @property
    def expired(self) -> bool:
        """Whether the entry's token has expired."""
        if self.expires is None:
            return False
        return self.expires <= datetime.now(tz=UTC)


def session_to_dict(entry: SessionEntry) -> Dict[str, Any]:
    """Generate a JSON-friendly dict from a :class:`.SessionEntry`."""
    data = entry._asdict()
    if entry.expires is not None:
        data['expires'] = entry.expires.isoformat()
    return data


def session_from_dict(data: Dict[str, Any]) -> SessionEntry:
    """Load a :class:`.SessionEntry` from a dict made by ``session_to_dict``."""
    expires = data.get('expires')
    if expires is not None:
        expires = dateutil.parser.parse(expires)
        if expires.tzinfo is None:
            expires = UTC.localize(expires)
    return SessionEntry(
        token=data['token'],
        partition=data['partition'],
        row=data['row'],
        expires=expires
    )
