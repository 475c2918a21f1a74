"""
memorywall.config — YAML Configuration Loader
==============================================

**Why this file exists:**
Platform policy knobs (institutional email domain, credential length,
content denylist, polling cadence) live in ``config.yaml`` so they can be
tuned without touching code.  Connection strings stay in the environment
(``DATABASE_URL`` via ``.env``) and never appear here.

Usage::

    from memorywall.config import load_config

    cfg = load_config()              # reads ./config.yaml by default
    print(cfg.institutional_domain)  # "college.edu"
    print(cfg.denylist)              # ("spam", "abuse", "hate")
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MemoryWallConfig:
    """Immutable configuration loaded from ``config.yaml``.

    Every field has a default, so ``MemoryWallConfig()`` is a usable
    configuration for tests and embedded use.
    """

    # Identity
    institutional_domain: str = "college.edu"
    min_password_length: int = 6
    cohort_count: int = 6  # Cohort index is drawn from [0, cohort_count)

    # Content
    denylist: tuple[str, ...] = ("spam", "abuse", "hate")
    excerpt_chars: int = 160
    post_list_limit: int = 30

    # Polling ("real-time" simulation)
    session_poll_seconds: float = 0.5
    channel_poll_seconds: float = 2.0

    @property
    def email_suffix(self) -> str:
        return "@" + self.institutional_domain


def _parse_denylist(raw) -> tuple[str, ...]:
    """Normalise the YAML ``denylist`` value to a tuple of lowercase terms.

    A bare string is one term, not a sequence of characters.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    elif not isinstance(raw, (list, tuple)):
        raise ValueError(
            f"denylist must be a list of terms, got {type(raw).__name__}"
        )
    return tuple(str(w).strip().lower() for w in raw if str(w).strip())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> MemoryWallConfig:
    """Read *path* and return a :class:`MemoryWallConfig` instance.

    Keys missing from the file keep their dataclass defaults; unknown keys
    are ignored.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    ValueError
        If ``denylist`` is neither a list nor a single string.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    known = {f.name for f in fields(MemoryWallConfig)}
    kwargs = {k: v for k, v in raw.items() if k in known}

    if "denylist" in kwargs:
        kwargs["denylist"] = _parse_denylist(kwargs["denylist"])
    for key in ("min_password_length", "cohort_count", "excerpt_chars", "post_list_limit"):
        if key in kwargs:
            kwargs[key] = int(kwargs[key])
    for key in ("session_poll_seconds", "channel_poll_seconds"):
        if key in kwargs:
            kwargs[key] = float(kwargs[key])

    return MemoryWallConfig(**kwargs)
