from flask import Blueprint, jsonify

api_blueprint = Blueprint("api", __name__)


@api_blueprint.get("/health")
def healthcheck():
    """Lightweight health probe for uptime checks."""
    return jsonify({"status": "ok"}), 200
