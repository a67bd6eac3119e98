import os
from dataclasses import asdict, dataclass, fields
from typing import Dict


@dataclass
class BaseConfig:
    DEBUG: bool = False
    TESTING: bool = False
    SECRET_KEY: str = "change-me"
    DATABASE_PATH: str = "storage/sqlite/lobby.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    SESSION_COOKIE_NAME: str = "lobby_session"

    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256"
    PASSWORD_SALT_LENGTH: int = 16
    GAME_LIST_GROUP: str = "GameList"
    RELOGIN_WORKERS: int = 4
    LOG_LEVEL: str = "INFO"


@dataclass
class DevelopmentConfig(BaseConfig):
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"


@dataclass
class TestingConfig(BaseConfig):
    TESTING: bool = True
    SECRET_KEY: str = "testing-secret"
    # Empty path leaves storage.sqlite.database.DB_PATH untouched (tests patch it).
    DATABASE_PATH: str = ""
    # Cheap hashing keeps the suite fast.
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"


CONFIG_MAP = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": BaseConfig
}


def _coerce(raw: str, default: object) -> object:
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        return int(raw)
    return raw


def load_config(name: str) -> Dict[str, object]:
    """Build the config mapping for ``name``; env vars named like a field override it."""
    config_class = CONFIG_MAP.get(name, BaseConfig)
    config = asdict(config_class())
    for item in fields(config_class):
        raw = os.getenv(item.name)
        if raw is not None:
            config[item.name] = _coerce(raw, config[item.name])
    return config
