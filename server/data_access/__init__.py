from .game_repository import GameRepository, ensure_games_table
from .user_repository import UserRepository, ensure_users_table

__all__ = [
    "GameRepository",
    "UserRepository",
    "ensure_games_table",
    "ensure_users_table",
]
