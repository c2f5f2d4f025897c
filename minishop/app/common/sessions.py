"""Server-side sessions.

The client only ever holds an opaque random token in a cookie; the identity
it maps to lives in a :class:`SessionStore`. The default store is a
process-local dict, which assumes a single serving process. Pass another
store to ``create_app(session_store=...)`` to share sessions between
processes; nothing outside this module touches the store directly.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
DEFAULT_LIFETIME_SECONDS = 24 * 60 * 60
DEFAULT_PURGE_INTERVAL_SECONDS = 5 * 60


@dataclass(frozen=True)
class Identity:
    """Who the current request belongs to. Snapshot taken at login."""

    id: int
    username: str

    def to_dict(self):
        return {"id": self.id, "username": self.username}


@dataclass(frozen=True)
class SessionRecord:
    identity: Identity
    created_at: float


class SessionStore(Protocol):
    def get(self, token: str) -> Optional[SessionRecord]: ...

    def put(self, token: str, record: SessionRecord) -> None: ...

    def delete(self, token: str) -> None: ...

    def items(self) -> Iterable[Tuple[str, SessionRecord]]: ...


class MemorySessionStore:
    """Dict-backed store, safe for concurrent request threads."""

    def __init__(self) -> None:
        self._records: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._records.get(token)

    def put(self, token: str, record: SessionRecord) -> None:
        with self._lock:
            self._records[token] = record

    def delete(self, token: str) -> None:
        with self._lock:
            self._records.pop(token, None)

    def items(self) -> Iterable[Tuple[str, SessionRecord]]:
        with self._lock:
            return list(self._records.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class SessionManager:
    def __init__(
        self,
        store: Optional[SessionStore] = None,
        lifetime_seconds: int = DEFAULT_LIFETIME_SECONDS,
        clock: Callable[[], float] = time.time,
        purge_interval_seconds: int = DEFAULT_PURGE_INTERVAL_SECONDS,
    ) -> None:
        self.store = store if store is not None else MemorySessionStore()
        self.lifetime_seconds = lifetime_seconds
        self._clock = clock
        # Sweeping more often than sessions can expire gains nothing.
        self.purge_interval_seconds = min(purge_interval_seconds, lifetime_seconds)
        self._last_purge = clock()

    def create_session(self, user) -> str:
        """Bind a fresh token to ``user`` (anything with ``id`` and ``username``)."""
        self._maybe_purge()
        token = secrets.token_urlsafe(TOKEN_BYTES)
        identity = Identity(id=int(user.id), username=str(user.username))
        self.store.put(token, SessionRecord(identity=identity, created_at=self._clock()))
        return token

    def resolve_session(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            return None
        record = self.store.get(token)
        if record is None:
            return None
        if self._expired(record):
            self.store.delete(token)
            return None
        return record.identity

    def destroy_session(self, token: Optional[str]) -> None:
        if token:
            self.store.delete(token)

    def purge_expired(self) -> int:
        expired = [token for token, record in self.store.items() if self._expired(record)]
        for token in expired:
            self.store.delete(token)
        if expired:
            logger.info("Purged %d expired sessions", len(expired))
        return len(expired)

    def _maybe_purge(self) -> None:
        # Abandoned sessions never come back to be expired on resolve.
        now = self._clock()
        if now - self._last_purge >= self.purge_interval_seconds:
            self._last_purge = now
            self.purge_expired()

    def _expired(self, record: SessionRecord) -> bool:
        return self._clock() - record.created_at >= self.lifetime_seconds
