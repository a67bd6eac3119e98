import json

import pytest

from server.data_access.game_repository import GameRepository
from server.data_access.user_repository import UserRepository


def post(client, path, payload=None):
    return client.post(
        f"/api/user/{path}",
        data=json.dumps(payload or {}),
        content_type="application/json",
    )


def session_of(client):
    with client.session_transaction() as sess:
        return dict(sess)


def test_signup_then_duplicate(client):
    first = post(client, "signup", {"username": "alice", "password": "pw1"})
    assert first.status_code == 200
    assert first.get_json() == 1

    second = post(client, "signup", {"username": "alice", "password": "pw2"})
    assert second.status_code == 400
    body = second.get_json()
    assert body["code"] == "duplicate_username"
    assert "already registered" in body["message"]


def test_login_flow_sets_session(client):
    post(client, "signup", {"username": "alice", "password": "pw1"})
    post(client, "logout")

    bad = post(client, "login", {"username": "alice", "password": "wrong"})
    assert bad.status_code == 400
    assert bad.get_json()["code"] == "invalid_password"
    assert not session_of(client).get("logged_in")

    good = post(client, "login", {"username": "alice", "password": "pw1"})
    assert good.status_code == 200
    assert good.get_json() == 1
    sess = session_of(client)
    assert sess["logged_in"] is True
    assert sess["user_id"] == 1


def test_login_unknown_user(client):
    resp = post(client, "login", {"username": "ghost", "password": "pw"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "user_not_found"


def test_missing_body_is_bad_request(client):
    resp = client.post("/api/user/signup")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "missing_fields"


def test_logout_always_ok(client):
    assert post(client, "logout").status_code == 200

    post(client, "signup", {"username": "alice", "password": "pw1"})
    resp = post(client, "logout")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == ""
    assert client.get("/api/user/status").get_json() == {"authenticated": False}


def test_email_endpoints(client):
    post(client, "signup", {"username": "alice", "password": "pw1"})

    missing = post(client, "findEmail", {"username": "alice"})
    assert missing.status_code == 200
    assert missing.get_json() is None

    saved = post(client, "submitEmail", {"username": "alice", "email": "a@example.com"})
    assert saved.status_code == 200
    assert saved.get_json() == 1
    assert post(client, "findEmail", {"username": "alice"}).get_json() == "a@example.com"

    assert post(client, "submitEmail", {"username": "ghost", "email": "g@example.com"}).get_json()["code"] == "update_failed"
    assert post(client, "findEmail", {"username": "ghost"}).status_code == 400


def test_status_reports_user(client):
    post(client, "signup", {"username": "alice", "password": "pw1"})
    resp = client.get("/api/user/status")
    assert resp.status_code == 200
    assert resp.get_json() == {"id": 1, "username": "alice", "authenticated": True, "gameId": None}


def test_status_for_deleted_user_forces_logout(client):
    post(client, "signup", {"username": "alice", "password": "pw1"})
    UserRepository().delete(1)

    resp = client.get("/api/user/status")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "user_not_found"
    assert "logged_in" not in session_of(client)
    assert client.get("/api/user/status").get_json() == {"authenticated": False}


@pytest.fixture
def full_game(client):
    post(client, "signup", {"username": "bob", "password": "pw2"})
    post(client, "signup", {"username": "alice", "password": "pw1"})
    post(client, "logout")
    users = UserRepository()
    game_id = GameRepository().create_game(last_event={"change": "points"})
    users.assign_game(1, game_id, 1)
    users.assign_game(2, game_id, 2)
    return game_id


def test_re_login_joins_game(client, app, full_game):
    resp = post(client, "reLogin", {"username": "alice", "password": "pw1"})
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == ""

    sess = session_of(client)
    assert sess["game_id"] == full_game
    assert sess["p_num"] == 2
    broadcast = app.extensions["broadcast_service"]
    assert sess["client_id"] in broadcast.members("GameList")
    [message] = broadcast.drain(sess["client_id"])
    assert message["data"]["change"] == "points"

    status = client.get("/api/user/status").get_json()
    assert status == {"id": 2, "username": "alice", "authenticated": True, "gameId": full_game}


def test_re_login_bad_password(client, full_game):
    resp = post(client, "reLogin", {"username": "alice", "password": "wrong"})
    assert resp.status_code == 400
    assert not session_of(client).get("logged_in")


def test_re_login_without_password(client, full_game):
    resp = post(client, "reLogin", {"username": "alice"})
    assert resp.status_code == 200
    sess = session_of(client)
    assert sess["logged_in"] is True
    assert sess["user_id"] == 2
    assert sess["game_id"] == full_game
