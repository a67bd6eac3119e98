import sqlite3
from contextlib import contextmanager
from pathlib import Path

DB_PATH = Path("storage/sqlite/lobby.db")


def configure(path: str | Path) -> None:
    """Point every subsequent connection at ``path``."""
    global DB_PATH
    DB_PATH = Path(path)


@contextmanager
def get_connection():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(DB_PATH)
    try:
        yield connection
    finally:
        connection.close()
