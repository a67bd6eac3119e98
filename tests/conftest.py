import os
import sys

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from storage.sqlite import database


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    db_path = tmp_path / "test_lobby.db"
    monkeypatch.setattr(database, "DB_PATH", db_path)
    return db_path


@pytest.fixture
def app(temp_db):
    from server import create_app

    app = create_app("testing")
    yield app
    app.extensions["auth_service"].shutdown()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
