import pytest

from server import create_app
from storage.sqlite import database


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "DB_PATH", tmp_path / "app.db")
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


def test_healthcheck(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_testing_config_applied(app):
    assert app.config["TESTING"] is True
    assert "auth_service" in app.extensions
