# server/services/auth_service.py
from __future__ import annotations

import concurrent.futures
import logging
from typing import Any, Dict, Optional

from server.data_access.user_repository import UserRepository
from server.models.user import User

from .broadcast_service import BroadcastService
from .errors import (
    AuthError,
    DependencyFailure,
    DuplicateUsername,
    MissingFields,
    UpdateFailed,
    UserNotFound,
)
from .game_service import GameService
from .password_service import PasswordService
from .session_store import SessionContext, logout

logger = logging.getLogger(__name__)


class AuthService:
    """
    Signup, login and session bookkeeping for lobby users.

    Every operation takes the caller's SessionContext explicitly and raises an
    AuthError subclass on failure; lower-layer exceptions are wrapped in
    DependencyFailure.
    """

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_service: PasswordService,
        game_service: GameService,
        broadcast_service: BroadcastService,
        game_list_group: str = "GameList",
        max_workers: int = 4,
    ) -> None:
        self._users = user_repository
        self._passwords = password_service
        self._games = game_service
        self._broadcast = broadcast_service
        self._game_list_group = game_list_group
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)

    def signup(self, session: SessionContext, username: str, password: str) -> int:
        if not username or not password:
            raise MissingFields()
        if self._find_user(username) is not None:
            raise DuplicateUsername()

        encrypted_password = self._passwords.hash(password)
        user_id = self._call(self._users.create, username, encrypted_password)
        session.write(logged_in=True, user_id=user_id)
        logger.info("Registered user '%s' (%s)", username, user_id)
        return user_id

    def login(self, session: SessionContext, username: str, password: str) -> int:
        if not username or not password:
            raise MissingFields()
        user = self._find_user(username)
        if user is None:
            raise UserNotFound()

        self._passwords.verify(password, user.encrypted_password)
        session.write(logged_in=True, user_id=user.id)
        logger.info("User '%s' logged in", username)
        return user.id

    def re_login(self, session: SessionContext, username: str, password: Optional[str] = None) -> None:
        """
        Restore a client into its game after a reconnect.

        The password is only checked when the session is not already logged in
        and one was supplied. Game population and the password check run
        concurrently; the first to fail aborts the request.
        """
        user = self._find_user(username)
        if user is None:
            raise UserNotFound()

        pending = [self._executor.submit(self._games.populate_game, user.game_id)]
        if not session.logged_in and password:
            pending.append(self._executor.submit(self._passwords.verify, password, user.encrypted_password))

        for future in concurrent.futures.as_completed(pending):
            exc = future.exception()
            if exc is not None:
                for other in pending:
                    other.cancel()
                raise DependencyFailure.wrap(exc)
        game: Dict[str, Any] = pending[0].result()

        session.write(logged_in=True, user_id=user.id, game_id=game["id"], p_num=user.p_num)
        client_id = session.client_id
        self._broadcast.subscribe(client_id, [game["id"]])
        self._broadcast.join(client_id, self._game_list_group)
        self._broadcast.publish([game["id"]], "updated", {**game.get("last_event", {}), "game": game})
        logger.info("User '%s' rejoined game %s", username, game["id"])

    def logout(self, session: SessionContext) -> None:
        logout(session, self._broadcast)

    def submit_email(self, username: str, email: Optional[str]) -> int:
        updated = self._call(self._users.update_email, username, email)
        if not updated:
            raise UpdateFailed()
        return int(updated["id"])

    def find_email(self, username: str) -> Optional[str]:
        user = self._find_user(username)
        if user is None:
            raise UserNotFound("Unable to Find User Email")
        return user.email

    def status(self, session: SessionContext) -> Dict[str, Any]:
        user_id = session.user_id
        authenticated = session.logged_in
        if not authenticated or not user_id:
            return {"authenticated": False}

        game_id = session.game_id
        try:
            row = self._call(self._users.find_by_id, user_id)
            if row is None:
                raise UserNotFound(f"User {user_id} no longer exists")
            game = self._call(self._games.find_game, game_id) if game_id else None
        except AuthError as exc:
            logger.warning("Session for user %s failed re-validation: %s", user_id, exc.message)
            self.logout(session)
            raise

        return {
            "id": user_id,
            "username": row["username"],
            "authenticated": authenticated,
            # Only report a game once both seats are filled.
            "gameId": game_id if game and len(game["players"]) == 2 else None,
        }

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)

    def _find_user(self, username: str) -> Optional[User]:
        row = self._call(self._users.find_by_username, username)
        return User.from_row(row) if row else None

    @staticmethod
    def _call(func, *args):
        try:
            return func(*args)
        except AuthError:
            raise
        except Exception as exc:
            raise DependencyFailure.wrap(exc) from exc
