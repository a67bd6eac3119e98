from typing import Mapping, Optional

from flask import Flask

from storage.sqlite import database

from .config.settings import load_config
from .controllers.api_controller import api_blueprint
from .controllers.auth_controller import auth_bp
from .data_access import GameRepository, UserRepository
from .services import AuthService, BroadcastService, GameService, PasswordService


def create_app(config_name: str = "development", overrides: Optional[Mapping[str, object]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(load_config(config_name))
    if overrides:
        app.config.update(overrides)

    if app.config.get("DATABASE_PATH"):
        database.configure(app.config["DATABASE_PATH"])

    app.register_blueprint(api_blueprint, url_prefix="/api")
    app.register_blueprint(auth_bp)

    user_repository = UserRepository()
    game_repository = GameRepository()
    broadcast_service = BroadcastService()
    app.extensions["broadcast_service"] = broadcast_service
    app.extensions["auth_service"] = AuthService(
        user_repository=user_repository,
        password_service=PasswordService(
            method=app.config["PASSWORD_HASH_METHOD"],
            salt_length=int(app.config["PASSWORD_SALT_LENGTH"]),
        ),
        game_service=GameService(game_repository, user_repository),
        broadcast_service=broadcast_service,
        game_list_group=app.config["GAME_LIST_GROUP"],
        max_workers=int(app.config["RELOGIN_WORKERS"]),
    )

    return app
