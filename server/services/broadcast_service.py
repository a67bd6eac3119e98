"""
In-process publish/subscribe for game updates.

Clients are identified by an opaque ``client_id`` kept in their session.
Published messages are queued per client until drained.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, Dict, Iterable, List, Mapping, MutableMapping, Set

logger = logging.getLogger(__name__)


def game_room(game_id: int) -> str:
    return f"game:{game_id}"


class BroadcastService:
    def __init__(self, *, max_pending: int = 100) -> None:
        self._lock = threading.Lock()
        self._rooms: MutableMapping[str, Set[str]] = {}
        self._mailboxes: Dict[str, Deque[Dict[str, object]]] = {}
        self._max_pending = max_pending

    def subscribe(self, client_id: str, game_ids: Iterable[int]) -> None:
        """Subscribe a client to update notifications for each game."""
        for game_id in game_ids:
            self.join(client_id, game_room(game_id))

    def join(self, client_id: str, room: str) -> None:
        with self._lock:
            self._rooms.setdefault(room, set()).add(client_id)
            self._mailboxes.setdefault(client_id, deque(maxlen=self._max_pending))
        logger.debug("Client %s joined '%s'", client_id, room)

    def leave_all(self, client_id: str) -> None:
        with self._lock:
            for room in list(self._rooms):
                self._rooms[room].discard(client_id)
                if not self._rooms[room]:
                    del self._rooms[room]
            self._mailboxes.pop(client_id, None)

    def publish(self, game_ids: Iterable[int], verb: str, data: Mapping[str, object]) -> int:
        """Queue ``{verb, id, data}`` for every subscriber of each game; returns deliveries."""
        delivered = 0
        with self._lock:
            for game_id in game_ids:
                message = {"verb": verb, "id": game_id, "data": dict(data)}
                for client_id in self._rooms.get(game_room(game_id), ()):
                    self._mailboxes[client_id].append(message)
                    delivered += 1
        logger.debug("Published '%s' to %s subscriber(s)", verb, delivered)
        return delivered

    def members(self, room: str) -> Set[str]:
        with self._lock:
            return set(self._rooms.get(room, ()))

    def drain(self, client_id: str) -> List[Dict[str, object]]:
        with self._lock:
            mailbox = self._mailboxes.get(client_id)
            if not mailbox:
                return []
            messages = list(mailbox)
            mailbox.clear()
            return messages
