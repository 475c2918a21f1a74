"""
memorywall.errors — Error Taxonomy
===================================

Every public operation fails synchronously with one of these before it
writes anything, so a failed call never leaves half-applied side effects.
"""

from __future__ import annotations


class MemoryWallError(Exception):
    """Base class for all platform errors."""


class ValidationError(MemoryWallError):
    """Malformed input (short credential, unknown moderation status, ...)."""


class DomainError(ValidationError):
    """Email address outside the institutional domain."""


class NotFoundError(MemoryWallError):
    """Unknown user, post or event id."""


class ConflictError(MemoryWallError):
    """Duplicate registration (account or event)."""


class AuthError(MemoryWallError):
    """Missing session or insufficient role."""


class ContentRejected(MemoryWallError):
    """Message text matched the content denylist."""
