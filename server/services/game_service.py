from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from server.data_access.game_repository import GameRepository
from server.data_access.user_repository import UserRepository
from server.models.user import User

from .errors import GameNotFound

logger = logging.getLogger(__name__)


class GameService:
    """Resolves games and the players seated in them."""

    def __init__(self, game_repository: GameRepository, user_repository: UserRepository) -> None:
        self._games = game_repository
        self._users = user_repository

    def find_game(self, game_id: Optional[int]) -> Dict[str, Any]:
        """Game record plus the ids of its players, ordered by player number."""
        game = self._load(game_id)
        game["players"] = [int(row["id"]) for row in self._users.list_by_game(game["id"])]
        return game

    def populate_game(self, game_id: Optional[int]) -> Dict[str, Any]:
        """Game record with each player expanded to its public fields."""
        game = self._load(game_id)
        game["players"] = [User.from_row(row).public_view() for row in self._users.list_by_game(game["id"])]
        logger.debug("Populated game %s with %s player(s)", game["id"], len(game["players"]))
        return game

    def _load(self, game_id: Optional[int]) -> Dict[str, Any]:
        if game_id is None:
            raise GameNotFound()
        game = self._games.get_game(int(game_id))
        if game is None:
            raise GameNotFound(f"Game {game_id} does not exist")
        return game
