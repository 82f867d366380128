from __future__ import annotations

import threading
import uuid
from typing import Any

import bcrypt

from .models import UserProfile

_users: dict[str, dict[str, Any]] = {}
_ids_by_email: dict[str, str] = {}
_lock = threading.Lock()


class EmailAlreadyRegistered(ValueError):
    pass


class UserNotFound(KeyError):
    pass


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _session_user(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "name": record["name"],
        "email": record["email"],
        "role": record["role"],
    }


def create_user(name: str, email: str, password: str, role: str = "user") -> dict[str, Any]:
    """Register a user with a zeroed profile. Returns the session user dict."""
    key = email.strip().lower()
    with _lock:
        if key in _ids_by_email:
            raise EmailAlreadyRegistered(email)
        user_id = uuid.uuid4().hex
        _users[user_id] = {
            "id": user_id,
            "name": name,
            "email": key,
            "password_hash": _hash_password(password),
            "points": 0,
            "vendors_added": 0,
            "reviews_given": 0,
            "role": role,
        }
        _ids_by_email[key] = user_id
        return _session_user(_users[user_id])


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{id, name, email, role}`` or ``None``."""
    user_id = _ids_by_email.get(email.strip().lower())
    record = _users.get(user_id) if user_id else None
    if record and _verify_password(password, record["password_hash"]):
        return _session_user(record)
    return None


def get_profile(user_id: str) -> UserProfile:
    record = _users.get(user_id)
    if record is None:
        raise UserNotFound(user_id)
    return UserProfile(**{k: v for k, v in record.items() if k != "password_hash"})


def increment_profile(
    user_id: str,
    points: int = 0,
    vendors_added: int = 0,
    reviews_given: int = 0,
) -> UserProfile:
    with _lock:
        record = _users.get(user_id)
        if record is None:
            raise UserNotFound(user_id)
        record["points"] += points
        record["vendors_added"] += vendors_added
        record["reviews_given"] += reviews_given
    return get_profile(user_id)


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    create_user("Demo User", "user@thelewale.in", "user123")
    create_user("Admin", "admin@thelewale.in", "admin123", role="admin")


_seed_users()
