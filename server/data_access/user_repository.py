# server/data_access/user_repository.py
from typing import Optional, Dict, Any, List
from storage.sqlite.database import get_connection

# --- Schema init (idempotent) -------------------------------------------------
def ensure_users_table() -> None:
    """Create users table if it doesn't exist. Safe to call multiple times."""
    with get_connection() as conn:
        cur = conn.cursor()
        cur.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE NOT NULL,
            encrypted_password TEXT NOT NULL,
            email TEXT,
            p_num INTEGER,
            game_id INTEGER REFERENCES games(id) ON DELETE SET NULL,
            created_at TEXT DEFAULT (datetime('now'))
        )
        """)
        cur.execute("CREATE INDEX IF NOT EXISTS idx_users_game ON users(game_id, p_num)")
        conn.commit()

# --- Row factory to dict ------------------------------------------------------
def _dict_factory(cursor, row):
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}

# --- CRUD ---------------------------------------------------------------------
def create_user(username: str, encrypted_password: str) -> int:
    with get_connection() as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO users (username, encrypted_password) VALUES (?, ?)",
            (username, encrypted_password),
        )
        conn.commit()
        return cur.lastrowid

def find_user_by_username(username: str) -> Optional[Dict[str, Any]]:
    with get_connection() as conn:
        conn.row_factory = _dict_factory
        cur = conn.cursor()
        cur.execute("SELECT * FROM users WHERE username = ?", (username,))
        return cur.fetchone()

def find_user_by_id(user_id: int) -> Optional[Dict[str, Any]]:
    with get_connection() as conn:
        conn.row_factory = _dict_factory
        cur = conn.cursor()
        cur.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        return cur.fetchone()


class UserRepository:
    def __init__(self) -> None:
        ensure_users_table()

    def create(self, username: str, encrypted_password: str) -> int:
        return int(create_user(username, encrypted_password))

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        return find_user_by_username(username)

    def find_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        return find_user_by_id(user_id)

    def update_email(self, username: str, email: Optional[str]) -> Optional[Dict[str, Any]]:
        """Set the email of the user named ``username``; None when nothing matched."""
        with get_connection() as conn:
            cur = conn.cursor()
            cur.execute("UPDATE users SET email = ? WHERE username = ?", (email, username))
            conn.commit()
            if cur.rowcount == 0:
                return None
        return find_user_by_username(username)

    def assign_game(self, user_id: int, game_id: Optional[int], p_num: Optional[int]) -> None:
        with get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                "UPDATE users SET game_id = ?, p_num = ? WHERE id = ?",
                (game_id, p_num, user_id),
            )
            conn.commit()

    def list_by_game(self, game_id: int) -> List[Dict[str, Any]]:
        with get_connection() as conn:
            conn.row_factory = _dict_factory
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM users WHERE game_id = ? ORDER BY p_num, id",
                (game_id,),
            )
            return cur.fetchall()

    def delete(self, user_id: int) -> bool:
        with get_connection() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM users WHERE id = ?", (user_id,))
            conn.commit()
            return cur.rowcount > 0
