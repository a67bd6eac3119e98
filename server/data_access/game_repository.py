from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from storage.sqlite.database import get_connection


def ensure_games_table() -> None:
    with get_connection() as conn:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS games (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                status TEXT NOT NULL DEFAULT 'open',
                last_event_json TEXT,
                created_at TEXT DEFAULT (datetime('now')),
                updated_at TEXT DEFAULT (datetime('now'))
            )
            """
        )
        conn.commit()


class GameRepository:
    def __init__(self) -> None:
        ensure_games_table()

    def create_game(self, *, status: str = "open", last_event: Optional[Mapping[str, Any]] = None) -> int:
        last_event_json = json.dumps(dict(last_event), ensure_ascii=False) if last_event is not None else None
        with get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO games (status, last_event_json) VALUES (?, ?)",
                (status, last_event_json),
            )
            conn.commit()
            return int(cur.lastrowid)

    def get_game(self, game_id: int) -> Optional[Dict[str, Any]]:
        with get_connection() as conn:
            conn.row_factory = lambda cursor, row: {col[0]: row[idx] for idx, col in enumerate(cursor.description)}
            cur = conn.cursor()
            cur.execute(
                """
                SELECT id, status, last_event_json, created_at, updated_at
                FROM games
                WHERE id = ?
                """,
                (game_id,),
            )
            record = cur.fetchone()
        if not record:
            return None
        raw_event = record.pop("last_event_json", None)
        try:
            record["last_event"] = json.loads(raw_event) if raw_event else {}
        except json.JSONDecodeError:
            record["last_event"] = {}
        return record
