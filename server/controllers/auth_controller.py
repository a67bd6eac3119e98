# server/controllers/auth_controller.py
import logging

from flask import Blueprint, current_app, jsonify, request, session

from server.services.auth_service import AuthService
from server.services.errors import DependencyFailure
from server.services.session_store import SessionContext

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _service() -> AuthService:
    return current_app.extensions["auth_service"]


def _session() -> SessionContext:
    return SessionContext(session)


def _bad_request(exc: Exception):
    error = DependencyFailure.wrap(exc)
    logger.warning("%s %s rejected: %s", request.method, request.path, error.message)
    return jsonify(error.to_payload()), 400


@auth_bp.route("/api/user/signup", methods=["POST"])
def signup():
    data = request.get_json(silent=True) or {}
    try:
        user_id = _service().signup(_session(), data.get("username"), data.get("password"))
    except Exception as exc:
        return _bad_request(exc)
    return jsonify(user_id), 200

@auth_bp.route("/api/user/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    try:
        user_id = _service().login(_session(), data.get("username"), data.get("password"))
    except Exception as exc:
        return _bad_request(exc)
    return jsonify(user_id), 200

@auth_bp.route("/api/user/reLogin", methods=["POST"])
def re_login():
    data = request.get_json(silent=True) or {}
    try:
        _service().re_login(_session(), data.get("username"), data.get("password"))
    except Exception as exc:
        return _bad_request(exc)
    return "", 200

@auth_bp.route("/api/user/logout", methods=["POST"])
def logout():
    _service().logout(_session())
    return "", 200

@auth_bp.route("/api/user/submitEmail", methods=["POST"])
def submit_email():
    data = request.get_json(silent=True) or {}
    try:
        user_id = _service().submit_email(data.get("username"), data.get("email"))
    except Exception as exc:
        return _bad_request(exc)
    return jsonify(user_id), 200

@auth_bp.route("/api/user/findEmail", methods=["POST"])
def find_email():
    data = request.get_json(silent=True) or {}
    try:
        email = _service().find_email(data.get("username"))
    except Exception as exc:
        return _bad_request(exc)
    return jsonify(email), 200

@auth_bp.route("/api/user/status", methods=["GET"])
def status():
    try:
        result = _service().status(_session())
    except Exception as exc:
        return _bad_request(exc)
    return jsonify(result), 200
