from __future__ import annotations
from typing import Dict, Optional, Protocol
from flask_login.mixins import UserMixin

from gate.auth.domain.errors import SessionError

# ─────── Modelo mínimo de usuario ───────
class User(UserMixin):
    def __init__(self, user_id: str, provider: str) -> None:
        self.id       = user_id
        self.provider = provider

    def get_id(self) -> str:
        # Clave de sesión: el mismo id en dos proveedores son dos usuarios
        if not self.id:
            raise SessionError("User object has no id")
        return f"{self.provider}:{self.id}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return (self.provider, self.id) == (other.provider, other.id)

    def __hash__(self) -> int:
        return hash((self.provider, self.id))

    def __repr__(self) -> str:
        return f"User({self.provider}:{self.id})"


class UserStore(Protocol):
    def get(self, key: str) -> Optional[User]: ...
    def set(self, key: str, user: User) -> None: ...
    def delete(self, key: str) -> None: ...


class InMemoryUserStore:
    """Store en memoria del proceso: sin persistencia ni locking."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def get(self, key: str) -> Optional[User]: return self._users.get(key)
    def set(self, key: str, user: User) -> None: self._users[key] = user
    def delete(self, key: str) -> None: self._users.pop(key, None)

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, key: object) -> bool:
        return key in self._users


def find_or_create(store: UserStore, provider: str, profile_id: str) -> User:
    candidate = User(profile_id, provider)
    key = candidate.get_id()
    existing = store.get(key)
    if existing is not None:
        return existing
    store.set(key, candidate)
    return candidate
