"""
memorywall.services.identity_service — Accounts & Session Pointer
==================================================================

Registration, sign-in and the single "current user" pointer stored under
the ``session`` key.

.. note::

    The credential check is a length policy only; no password is stored
    or compared.  This is pre-production validation, not authentication.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from memorywall.config import MemoryWallConfig
from memorywall.constants import ROLE_STUDENT, SESSION, USERS, new_id, utc_now_iso
from memorywall.database.store import RecordStore
from memorywall.errors import ConflictError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Profile fields update_profile() never touches
FROZEN_PROFILE_KEYS: frozenset[str] = frozenset({
    "id", "email", "role", "tag_affinity", "joined_at",
})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _check_domain(cfg: MemoryWallConfig, email: str) -> None:
    if not email.endswith(cfg.email_suffix):
        raise DomainError(f"Only {cfg.email_suffix} emails are allowed.")


def _check_password(cfg: MemoryWallConfig, password: str) -> None:
    if len(password) < cfg.min_password_length:
        raise ValidationError(
            f"Password must be at least {cfg.min_password_length} characters."
        )


def _find_by_email(users: dict[str, dict], email: str) -> dict | None:
    return next((u for u in users.values() if u.get("email") == email), None)


def make_initials(name: str) -> str:
    """First letter of each word, at most two, uppercased ("Rahul Kumar" → "RK")."""
    return "".join(word[0] for word in name.split())[:2].upper()


def _identity(user: dict) -> dict[str, Any]:
    return {"id": user["id"], "email": user["email"], "display_name": user["name"]}


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
def get_user(store: RecordStore, user_id: str | None) -> dict | None:
    """Fetch a user's profile by id, or None."""
    if not user_id:
        return None
    return store.get(USERS, {}).get(user_id)


def update_profile(store: RecordStore, user_id: str, **updates: Any) -> dict:
    """Merge *updates* into the user's profile and return the new profile.

    Keys in :data:`FROZEN_PROFILE_KEYS` are ignored.
    """
    users = store.get(USERS, {})
    user = users.get(user_id)
    if user is None:
        raise NotFoundError("User not found.")
    for key, value in updates.items():
        if key not in FROZEN_PROFILE_KEYS:
            user[key] = value
    store.set(USERS, users)
    return user


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
def sign_in(
    store: RecordStore, cfg: MemoryWallConfig, email: str, password: str
) -> dict[str, Any]:
    """Point the session at the account registered under *email*."""
    _check_domain(cfg, email)
    user = _find_by_email(store.get(USERS, {}), email)
    if user is None:
        raise NotFoundError("No account found with this email. Please register first.")
    _check_password(cfg, password)

    store.set(SESSION, user["id"])
    logger.info("Signed in %s", user["id"])
    return _identity(user)


def register(
    store: RecordStore,
    cfg: MemoryWallConfig,
    email: str,
    password: str,
    name: str,
    branch: str,
    batch: str,
    *,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """Create a student account and sign it in."""
    _check_domain(cfg, email)
    _check_password(cfg, password)
    users = store.get(USERS, {})
    if _find_by_email(users, email) is not None:
        raise ConflictError("Account already exists. Please sign in.")

    _rng = rng or random.Random()
    user = {
        "id": new_id(),
        "name": name,
        "email": email,
        "initials": make_initials(name),
        "role": ROLE_STUDENT,
        "branch": branch,
        "batch": batch,
        "bio": "",
        "location": "",
        "grad_index": _rng.randrange(cfg.cohort_count),
        "joined_at": utc_now_iso(),
        "tag_affinity": {},
    }
    users[user["id"]] = user
    store.set(USERS, users)
    store.set(SESSION, user["id"])
    logger.info("Registered %s (%s)", user["id"], email)
    return _identity(user)


def sign_out(store: RecordStore) -> None:
    store.remove(SESSION)


def session_pointer(store: RecordStore) -> str | None:
    """Raw session pointer (may reference a user that no longer exists)."""
    return store.get(SESSION)


def current_user(store: RecordStore) -> dict | None:
    """The signed-in user, or None when unset or dangling."""
    return get_user(store, session_pointer(store))
