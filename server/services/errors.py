"""
Error taxonomy for the auth endpoints.

Every failure a handler can report is an ``AuthError``; the controller turns
any of them into a 400 carrying ``to_payload()``.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional


class AuthError(RuntimeError):
    code = "auth_error"
    default_message = "Request could not be completed"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Mapping[str, object]] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = dict(details or {})

    def to_payload(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class MissingFields(AuthError):
    code = "missing_fields"
    default_message = "Missing fields"


class DuplicateUsername(AuthError):
    code = "duplicate_username"
    default_message = "That username is already registered to another user; try logging in!"


class UserNotFound(AuthError):
    code = "user_not_found"
    default_message = "Could not find that user with that username. Try signing up!"


class InvalidPassword(AuthError):
    code = "invalid_password"
    default_message = "Invalid password"


class UpdateFailed(AuthError):
    code = "update_failed"
    default_message = "Unable to Save Email to User"


class DependencyFailure(AuthError):
    """A collaborator (store, game service, broadcast) rejected the call."""

    code = "dependency_failure"
    default_message = "A backing service failed"

    @classmethod
    def wrap(cls, exc: BaseException) -> "AuthError":
        if isinstance(exc, AuthError):
            return exc
        return cls(str(exc) or cls.default_message, details={"type": type(exc).__name__})


class GameNotFound(DependencyFailure):
    code = "game_not_found"
    default_message = "Could not find a game for that user"
