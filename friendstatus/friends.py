"""
The friend list stored in a user's ``Friends`` property.

A list is serialized as ``country;name|country;name|...``; the empty string is
the empty list. Neither component may be empty or contain a delimiter, and a
name may not be ``*``.
"""

from typing import Iterable, Iterator, List, NamedTuple

ITEM_DELIMITER = '|'
FIELD_DELIMITER = ';'
WILDCARD = '*'
"""A row of ``*`` addresses a whole partition, so no friend may be named it."""


class Friend(NamedTuple):
    """A friend is addressed by the partition and row of their data entity."""

    country: str
    name: str

    def __str__(self) -> str:
        return f'{self.country}{FIELD_DELIMITER}{self.name}'


def validate(friend: Friend) -> None:
    """
    Check that ``friend`` can be written in the list format.

    Raises
    ------
    ValueError

    """
    for value in friend:
        if not value:
            raise ValueError('Friend fields may not be empty')
        if ITEM_DELIMITER in value or FIELD_DELIMITER in value:
            raise ValueError(f'Friend fields may not contain delimiters: '
                             f'{value!r}')
    if friend.name == WILDCARD:
        raise ValueError(f'{WILDCARD!r} is not a valid friend name')


class FriendList:
    """An ordered collection of unique friends."""

    def __init__(self, friends: Iterable[Friend] = ()) -> None:
        self._friends: List[Friend] = []
        for friend in friends:
            self.add(friend)

    @classmethod
    def parse(cls, raw: str) -> 'FriendList':
        """
        Load a list from its serialized form.

        Later duplicates are dropped.

        Raises
        ------
        ValueError
            If an item does not have exactly two non-empty fields.

        """
        if not raw:
            return cls()
        friends = []
        for item in raw.split(ITEM_DELIMITER):
            fields = item.split(FIELD_DELIMITER)
            if len(fields) != 2 or not all(fields):
                raise ValueError(f'Malformed friend entry: {item!r}')
            friends.append(Friend(*fields))
        return cls(friends)

    def serialize(self) -> str:
        """Render the list in its stored form."""
        return ITEM_DELIMITER.join(str(friend) for friend in self._friends)

    def add(self, friend: Friend) -> bool:
        """Append ``friend`` if absent; return whether the list changed."""
        validate(friend)
        if friend in self._friends:
            return False
        self._friends.append(friend)
        return True

    def remove(self, friend: Friend) -> bool:
        """Remove ``friend`` if present; return whether the list changed."""
        validate(friend)
        if friend not in self._friends:
            return False
        self._friends.remove(friend)
        return True

    def __contains__(self, friend: object) -> bool:
        return friend in self._friends

    def __iter__(self) -> Iterator[Friend]:
        return iter(self._friends)

    def __len__(self) -> int:
        return len(self._friends)

    def __repr__(self) -> str:
        return f'FriendList({self._friends!r})'
