from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, MutableMapping, Optional

from .broadcast_service import BroadcastService

logger = logging.getLogger(__name__)

SESSION_FIELDS = ("logged_in", "user_id", "game_id", "p_num")


class SessionContext:
    """Typed view over one client's session mapping (``flask.session`` in requests)."""

    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    @property
    def logged_in(self) -> bool:
        return bool(self._store.get("logged_in"))

    @property
    def user_id(self) -> Optional[int]:
        return self._store.get("user_id")

    @property
    def game_id(self) -> Optional[int]:
        return self._store.get("game_id")

    @property
    def client_id(self) -> str:
        client_id = self._store.get("client_id")
        if not client_id:
            client_id = uuid.uuid4().hex
            self._store["client_id"] = client_id
        return client_id

    @property
    def has_client_id(self) -> bool:
        return bool(self._store.get("client_id"))

    def read(self) -> Dict[str, Any]:
        return {key: self._store.get(key) for key in SESSION_FIELDS}

    def write(self, **values: Any) -> None:
        unknown = set(values) - set(SESSION_FIELDS)
        if unknown:
            raise KeyError(f"Unknown session field(s): {', '.join(sorted(unknown))}")
        self._store.update(values)

    def clear(self) -> None:
        self._store.clear()


def logout(session: SessionContext, broadcast: Optional[BroadcastService] = None) -> None:
    """Drop the client's subscriptions and wipe its session."""
    if broadcast is not None and session.has_client_id:
        broadcast.leave_all(session.client_id)
    user_id = session.user_id
    session.clear()
    if user_id is not None:
        logger.info("Logged out user %s", user_id)
