from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class User:
    id: int
    username: str
    encrypted_password: str
    email: Optional[str] = None
    p_num: Optional[int] = None
    game_id: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        return cls(
            id=int(row["id"]),
            username=row["username"],
            encrypted_password=row["encrypted_password"],
            email=row.get("email"),
            p_num=row.get("p_num"),
            game_id=row.get("game_id"),
            created_at=row.get("created_at"),
        )

    def public_view(self) -> Dict[str, Any]:
        """Fields safe to hand to other clients (no password hash)."""
        return {"id": self.id, "username": self.username, "pNum": self.p_num}
