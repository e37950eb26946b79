"""Per-chat conversation registry.

The registry owns one `Conversation` and one `asyncio.Lock` per chat. Callers hold the chat's lock
while processing a message so turns of one session never interleave; different chats never share a
conversation or a lock.
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass, field

from src.conversation.orchestrator import Conversation
from src.intent.enhancer import RemoteParser

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    conversation: Conversation
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class SessionRegistry:
    """Create, look up, reset and dispose conversations keyed by chat id.

    At most `max_sessions` conversations are kept; creating one more evicts the least recently used
    chat whose lock is not held. An evicted chat starts over with a fresh session.
    """

    def __init__(self, remote: RemoteParser | None = None, *, max_sessions: int = 10_000) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1")
        self._remote = remote
        self._max_sessions = max_sessions
        self._entries: OrderedDict[Hashable, _Entry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def _evict_idle(self) -> None:
        for key in list(self._entries):
            if len(self._entries) < self._max_sessions:
                return
            if not self._entries[key].lock.locked():
                del self._entries[key]
                logger.debug("session evicted size=%d", len(self._entries))

    def _entry(self, key: Hashable) -> _Entry:
        entry = self._entries.get(key)
        if entry is None:
            self._evict_idle()
            entry = _Entry(conversation=Conversation(remote=self._remote))
            self._entries[key] = entry
        else:
            self._entries.move_to_end(key)
        return entry

    def get(self, key: Hashable) -> Conversation:
        """Return the conversation for `key`, creating it on first use."""

        return self._entry(key).conversation

    def lock_for(self, key: Hashable) -> asyncio.Lock:
        """Return the lock that serializes turns of the session for `key`."""

        return self._entry(key).lock

    def reset(self, key: Hashable) -> None:
        """Clear the session state for `key` (no-op for unknown chats)."""

        entry = self._entries.get(key)
        if entry is not None:
            entry.conversation.reset()

    def dispose(self, key: Hashable) -> None:
        """Forget the conversation for `key` entirely."""

        self._entries.pop(key, None)
