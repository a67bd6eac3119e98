from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from .errors import InvalidPassword


class PasswordService:
    """Hashes and checks passwords; plaintext is never stored."""

    def __init__(self, *, method: str = "pbkdf2:sha256", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self._method, salt_length=self._salt_length)

    def verify(self, password: str, encrypted_password: str) -> None:
        """Raise InvalidPassword unless ``password`` matches the stored hash."""
        if not password or not encrypted_password or not check_password_hash(encrypted_password, password):
            raise InvalidPassword()
