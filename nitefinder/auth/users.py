from __future__ import annotations

from typing import Any

import bcrypt

# (username, password, role). The username is also the profile id.
_DEMO_ACCOUNTS = (
    ("user", "user123", "user"),
    ("explorer", "explorer123", "user"),
    ("admin", "admin123", "admin"),
)

_accounts: dict[str, dict[str, Any]] = {}


def _seed_accounts() -> None:
    for username, password, role in _DEMO_ACCOUNTS:
        _accounts[username] = {
            "id": username,
            "role": role,
            "password_hash": bcrypt.hashpw(password.encode(), bcrypt.gensalt()),
        }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Check a login attempt.

    Returns the session payload ``{id, username, role}``, or ``None`` when
    the account is unknown or the password does not match.
    """
    account = _accounts.get(username)
    if account is None:
        return None
    if not bcrypt.checkpw(password.encode(), account["password_hash"]):
        return None
    return {"id": account["id"], "username": username, "role": account["role"]}


_seed_accounts()
