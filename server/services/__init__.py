from .auth_service import AuthService
from .broadcast_service import BroadcastService
from .game_service import GameService
from .password_service import PasswordService
from .session_store import SessionContext

__all__ = [
    "AuthService",
    "BroadcastService",
    "GameService",
    "PasswordService",
    "SessionContext",
]
