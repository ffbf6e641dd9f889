"""
The session directory: which users are signed on, and with what token.

There is at most one live entry per user. The in-memory store keeps entries
in this process; the Redis store shares them between processes.
"""

import json
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from functools import wraps
from typing import Dict, Optional

import redis
from flask import Flask, current_app
from pytz import UTC

from .. import logging
from ..context import get_application_config
from ..domain import SessionEntry, session_from_dict, session_to_dict
from ..exceptions import SessionStoreError

logger = logging.getLogger(__name__)

EXTENSION = 'friendstatus.sessions'


class SessionStore(ABC):
    """Keeps ``user_id -> SessionEntry``."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[SessionEntry]:
        """
        Get the live entry for ``user_id``.

        An entry whose token has expired is evicted and treated as absent.
        """

    @abstractmethod
    def put(self, user_id: str, entry: SessionEntry) -> bool:
        """
        Store ``entry`` unless ``user_id`` already has a live entry.

        Returns
        -------
        bool
            True if the entry was stored.

        """

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Remove the entry for ``user_id``; return whether there was one."""


class InMemorySessionStore(SessionStore):
    """
    Entries in a dict, guarded by a single lock.

    Expired entries are dropped when looked up, and all of them are swept out
    on each :meth:`put`, so users who never return do not accumulate.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Optional[SessionEntry]:
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is not None and entry.expired:
                logger.debug('Session for %s has expired', user_id)
                del self._entries[user_id]
                return None
            return entry

    def put(self, user_id: str, entry: SessionEntry) -> bool:
        with self._lock:
            self._sweep()
            if user_id in self._entries:
                return False
            self._entries[user_id] = entry
            return True

    def _sweep(self) -> None:
        expired = [user_id for user_id, entry in self._entries.items()
                   if entry.expired]
        for user_id in expired:
            del self._entries[user_id]
        if expired:
            logger.debug('Swept %i expired sessions', len(expired))

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self._entries.pop(user_id, None) is not None


class RedisSessionStore(SessionStore):
    """
    Entries in Redis, expiring along with their tokens.

    The StrictRedis instance is thread safe; this class holds configuration.
    """

    prefix = 'friendstatus:session:'

    def __init__(self, host: str, port: int, db: int,
                 duration: int = 86400) -> None:
        """Open the connection to Redis."""
        logger.debug('New Redis connection at %s, port %s', host, port)
        self.r = redis.StrictRedis(host=host, port=port, db=db)
        self._duration = duration

    def _key(self, user_id: str) -> str:
        return f'{self.prefix}{user_id}'

    def _ttl(self, entry: SessionEntry) -> int:
        if entry.expires is None:
            return self._duration
        remaining = (entry.expires - datetime.now(tz=UTC)).total_seconds()
        return max(int(remaining), 1)

    def get(self, user_id: str) -> Optional[SessionEntry]:
        try:
            raw = self.r.get(self._key(user_id))
        except redis.exceptions.ConnectionError as e:
            raise SessionStoreError(f'Connection failed: {e}') from e
        if not raw:
            return None
        try:
            entry = session_from_dict(json.loads(raw))
        except (ValueError, KeyError) as e:
            raise SessionStoreError(f'Corrupt session for {user_id}') from e
        if entry.expired:
            self.delete(user_id)
            return None
        return entry

    def put(self, user_id: str, entry: SessionEntry) -> bool:
        try:
            stored = self.r.set(self._key(user_id),
                                json.dumps(session_to_dict(entry)),
                                nx=True, ex=self._ttl(entry))
        except redis.exceptions.ConnectionError as e:
            raise SessionStoreError(f'Connection failed: {e}') from e
        return bool(stored)

    def delete(self, user_id: str) -> bool:
        try:
            return bool(self.r.delete(self._key(user_id)))
        except redis.exceptions.ConnectionError as e:
            raise SessionStoreError(f'Connection failed: {e}') from e


def init_app(app: Flask, store: Optional[SessionStore] = None) -> None:
    """
    Set configuration defaults and attach a session store to ``app``.

    Parameters
    ----------
    app : :class:`flask.Flask`
    store : :class:`.SessionStore`
        If not provided, one is built from ``SESSION_STORE``.

    """
    app.config.setdefault('SESSION_STORE', 'memory')
    app.config.setdefault('REDIS_HOST', 'localhost')
    app.config.setdefault('REDIS_PORT', '6379')
    app.config.setdefault('REDIS_DATABASE', '0')
    if store is None:
        store = get_store(app)
    app.extensions[EXTENSION] = store


def get_store(app: Optional[Flask] = None) -> SessionStore:
    """Build the session store named by ``SESSION_STORE``."""
    config = get_application_config(app)
    kind = config.get('SESSION_STORE', 'memory')
    if kind == 'memory':
        return InMemorySessionStore()
    if kind == 'redis':
        return RedisSessionStore(
            host=config.get('REDIS_HOST', 'localhost'),
            port=int(config.get('REDIS_PORT', '6379')),
            db=int(config.get('REDIS_DATABASE', '0')),
            duration=int(config.get('TOKEN_LIFETIME', '86400'))
        )
    raise ValueError(f'Unknown SESSION_STORE: {kind}')


def current_store() -> SessionStore:
    """Get the session store attached to the current application."""
    return current_app.extensions[EXTENSION]   # type: ignore


@wraps(SessionStore.get)
def get(user_id: str) -> Optional[SessionEntry]:
    """Get the live entry for ``user_id``."""
    return current_store().get(user_id)


@wraps(SessionStore.put)
def put(user_id: str, entry: SessionEntry) -> bool:
    """Store ``entry`` unless ``user_id`` is already signed on."""
    return current_store().put(user_id, entry)


@wraps(SessionStore.delete)
def delete(user_id: str) -> bool:
    """Remove the entry for ``user_id``."""
    return current_store().delete(user_id)
